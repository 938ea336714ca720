# (c) Copyright Datacraft, 2026
"""Errors raised by the relationship schema, store and checker."""


class RelationshipError(Exception):
	"""Base class for all relationship engine errors."""


class UnknownRelationship(RelationshipError):
	"""Relationship is not defined in the frozen schema."""

	def __init__(self, relationship):
		self.relationship = relationship
		super().__init__(f"Unknown relationship: {relationship}")


class DuplicateTuple(RelationshipError):
	"""The exact (relationship, object, member) triple already exists."""

	def __init__(self, relationship, container_object, member):
		self.relationship = relationship
		self.container_object = container_object
		self.member = member
		super().__init__(
			f"Tuple already exists: {container_object}#{relationship}@{member}"
		)


class DuplicateRelationship(RelationshipError):
	"""A relationship name was defined twice."""

	def __init__(self, name: str):
		self.name = name
		super().__init__(f"Relationship already defined: {name}")


class SchemaFrozen(RelationshipError):
	"""The builder was modified after freeze()."""


class InvalidTuple(RelationshipError):
	"""A tuple string or tuple component is malformed."""


class CycleDetected(RelationshipError):
	"""Resolution revisited a (relationship, object) pair on its own path."""

	def __init__(self, path: list[str]):
		self.path = path
		super().__init__(f"Cycle detected: {' -> '.join(path)}")


class MaxDepthExceeded(RelationshipError):
	"""Resolution nested deeper than the configured limit."""

	def __init__(self, max_depth: int, path: list[str]):
		self.max_depth = max_depth
		self.path = path
		super().__init__(
			f"Max depth {max_depth} exceeded: {' -> '.join(path)}"
		)
