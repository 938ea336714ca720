# (c) Copyright Datacraft, 2026
"""Relationship identifiers and the frozen relationship schema."""
import logging
from dataclasses import dataclass, field
from typing import Iterator

from .exceptions import UnknownRelationship

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class RelationshipId:
	"""Name of a user-defined relationship, e.g. "owner" or "viewer"."""
	name: str

	def __str__(self):
		return self.name


@dataclass(frozen=True)
class RelationshipDefinition:
	"""
	Composition rules of one relationship.

	- contained: holding any of these on an object implies holding
	  this relationship on the same object
	- inherited: if the object is a member of another object through
	  one of these edge relationships, holders of this relationship on
	  that other object hold it here too
	"""
	id: RelationshipId
	contained: frozenset[RelationshipId] = field(default_factory=frozenset)
	inherited: frozenset[RelationshipId] = field(default_factory=frozenset)


class RelationshipSchema:
	"""
	Immutable set of relationship definitions.

	This is the type definition, not the data.
	"""

	def __init__(self, definitions: dict[RelationshipId, RelationshipDefinition]):
		self._definitions = dict(definitions)
		self._ids = {rid.name: rid for rid in self._definitions}

	def __contains__(self, relationship) -> bool:
		return _name_of(relationship) in self._ids

	def __iter__(self) -> Iterator[RelationshipDefinition]:
		for rid in sorted(self._definitions):
			yield self._definitions[rid]

	def __len__(self):
		return len(self._definitions)

	def resolve(self, relationship: "RelationshipId | str") -> RelationshipId:
		"""Return the interned id for a relationship or its name."""
		rid = self._ids.get(_name_of(relationship))
		if rid is None:
			raise UnknownRelationship(relationship)
		return rid

	def get_definition(
		self,
		relationship: "RelationshipId | str",
	) -> RelationshipDefinition:
		"""Get relationship definition, failing on undefined names."""
		return self._definitions[self.resolve(relationship)]

	def relationships(self) -> list[RelationshipId]:
		"""Get all defined relationships in name order."""
		return sorted(self._definitions)

	def dangling_references(self) -> list[tuple[RelationshipId, RelationshipId]]:
		"""
		Find composition edges naming undefined relationships.

		Returns (defining relationship, referenced relationship) pairs.
		"""
		dangling = []
		for definition in self:
			for other in sorted(definition.contained | definition.inherited):
				if other not in self._definitions:
					dangling.append((definition.id, other))
		return dangling


def _name_of(relationship: "RelationshipId | str") -> str:
	if isinstance(relationship, RelationshipId):
		return relationship.name
	return relationship
