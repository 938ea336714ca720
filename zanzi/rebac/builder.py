# (c) Copyright Datacraft, 2026
"""Schema builder: define relationships, then freeze into a store."""
import logging
from typing import Iterable

from zanzi.config import get_settings
from .exceptions import DuplicateRelationship, SchemaFrozen, UnknownRelationship
from .schema import RelationshipDefinition, RelationshipId, RelationshipSchema
from .store import RelationshipStore

logger = logging.getLogger(__name__)


# Relationships from Figure 1 of the Zanzibar paper
class Relations:
	"""Standard relationship names."""
	OWNER = 'owner'
	EDITOR = 'editor'
	VIEWER = 'viewer'
	PARENT = 'parent'


class SchemaBuilder:
	"""
	Accumulates relationship definitions before any tuple is written.

	Composition edges may name relationships that are defined later, or
	never; they are only resolved when a check reaches them.
	"""

	def __init__(self, allow_redefinition: bool | None = None):
		if allow_redefinition is None:
			allow_redefinition = get_settings().allow_relationship_redefinition
		self.allow_redefinition = allow_redefinition
		self._ids: dict[str, RelationshipId] = {}
		self._contained: dict[RelationshipId, set[RelationshipId]] = {}
		self._inherited: dict[RelationshipId, set[RelationshipId]] = {}
		self._frozen = False

	def define_relationship(
		self,
		name: str,
		contains: Iterable[RelationshipId | str] = (),
		inherits: Iterable[RelationshipId | str] = (),
	) -> RelationshipId:
		"""Register a relationship and return its handle."""
		self._ensure_mutable()
		if not name:
			raise ValueError("name is expected to be non-empty")

		if name in self._ids:
			if not self.allow_redefinition:
				raise DuplicateRelationship(name)
			logger.warning(f"Redefining relationship {name}")

		rid = self._ids.setdefault(name, RelationshipId(name))
		self._contained[rid] = set()
		self._inherited[rid] = set()

		for other in contains:
			self.add_contained(rid, other)
		for other in inherits:
			self.add_inherited(rid, other)
		return rid

	def add_contained(
		self,
		handle: RelationshipId | str,
		other: RelationshipId | str,
	) -> None:
		"""Declare that holding `other` implies holding `handle`."""
		self._ensure_mutable()
		self._contained[self._handle(handle)].add(self._intern(other))

	def add_inherited(
		self,
		handle: RelationshipId | str,
		other: RelationshipId | str,
	) -> None:
		"""Declare that `handle` propagates through `other` edges."""
		self._ensure_mutable()
		self._inherited[self._handle(handle)].add(self._intern(other))

	def freeze(self, max_depth: int | None = None) -> RelationshipStore:
		"""Produce an empty store over the finalized schema."""
		self._ensure_mutable()
		self._frozen = True

		schema = RelationshipSchema({
			rid: RelationshipDefinition(
				id=rid,
				contained=frozenset(self._contained[rid]),
				inherited=frozenset(self._inherited[rid]),
			)
			for rid in self._contained
		})
		for defining, referenced in schema.dangling_references():
			logger.warning(
				f"Relationship {defining} references undefined {referenced}"
			)
		logger.debug(f"Froze schema with {len(schema)} relationships")
		return RelationshipStore(schema, max_depth=max_depth)

	def _ensure_mutable(self):
		if self._frozen:
			raise SchemaFrozen("Schema builder is already frozen")

	def _handle(self, handle: RelationshipId | str) -> RelationshipId:
		rid = self._ids.get(str(handle))
		if rid is None:
			raise UnknownRelationship(handle)
		return rid

	def _intern(self, other: RelationshipId | str) -> RelationshipId:
		name = str(other)
		return self._ids.get(name) or RelationshipId(name)


def create_document_store(max_depth: int | None = None) -> RelationshipStore:
	"""
	Create a store with the document sharing schema.

	owner implies editor implies viewer, and viewers of an object are
	viewers of everything it holds through "parent".
	"""
	builder = SchemaBuilder()
	owner = builder.define_relationship(Relations.OWNER)
	parent = builder.define_relationship(Relations.PARENT)
	editor = builder.define_relationship(Relations.EDITOR, contains=[owner])
	builder.define_relationship(
		Relations.VIEWER,
		contains=[editor],
		inherits=[parent],
	)
	return builder.freeze(max_depth=max_depth)
