# (c) Copyright Datacraft, 2026
"""In-memory relationship tuple store with a reverse index."""
import logging
from typing import Any, Iterable

from zanzi.utils import raise_on_empty
from .exceptions import DuplicateTuple, InvalidTuple
from .graph import CheckResult, RelationshipChecker
from .schema import RelationshipId, RelationshipSchema
from .tuples import Member, Membership, TupleKey

logger = logging.getLogger(__name__)


class RelationshipStore:
	"""
	Store and query relationship tuples against a frozen schema.

	A tuple "relationship R holds between object P and member M" is kept
	twice: M in the direct member set of (R, P), and (R, P) in the
	reverse index entry of M. Both are updated together.
	"""

	def __init__(
		self,
		schema: RelationshipSchema,
		max_depth: int | None = None,
	):
		self.schema = schema
		self._direct: dict[RelationshipId, dict[Any, set[Member]]] = {
			rid: {} for rid in schema.relationships()
		}
		self._memberships: dict[Member, set[Membership]] = {}
		self.checker = RelationshipChecker(self, max_depth=max_depth)

	def __len__(self):
		return sum(
			len(members)
			for objects in self._direct.values()
			for members in objects.values()
		)

	# Write operations

	def write(
		self,
		relationship: RelationshipId | str,
		container_object: Any,
		member: Member,
	) -> None:
		"""Write a relationship tuple."""
		rid = self._validate(relationship, container_object, member)
		self._insert(rid, container_object, member)

	def write_object(
		self,
		relationship: RelationshipId | str,
		container_object: Any,
		child: Any,
	) -> None:
		"""Make `child` an object member of `container_object`."""
		self.write(relationship, container_object, Member.object(child))

	def write_user(
		self,
		relationship: RelationshipId | str,
		container_object: Any,
		user: Any,
	) -> None:
		"""Grant `user` the relationship directly on `container_object`."""
		self.write(relationship, container_object, Member.user(user))

	def write_tuple(self, key: TupleKey | str) -> None:
		"""Write a tuple given as a TupleKey or its string form."""
		if isinstance(key, str):
			key = TupleKey.parse(key)
		self.write(key.relation, key.object_id, key.member)

	def write_batch(self, keys: Iterable[TupleKey | str]) -> int:
		"""
		Write multiple tuples.

		Every tuple is validated before any is written, so a failing
		batch leaves the store unchanged.
		"""
		pending = []
		seen = set()
		for key in keys:
			if isinstance(key, str):
				key = TupleKey.parse(key)
			rid = self._validate(key.relation, key.object_id, key.member)
			triple = (rid, key.object_id, key.member)
			if triple in seen:
				raise DuplicateTuple(rid, key.object_id, key.member)
			seen.add(triple)
			pending.append(triple)

		for rid, container_object, member in pending:
			self._insert(rid, container_object, member)
		return len(pending)

	def _validate(
		self,
		relationship: RelationshipId | str,
		container_object: Any,
		member: Member,
	) -> RelationshipId:
		rid = self.schema.resolve(relationship)
		try:
			raise_on_empty(container_object=container_object, member=member.id)
		except ValueError as e:
			raise InvalidTuple(str(e)) from e

		members = self._direct[rid].get(container_object)
		if members is not None and member in members:
			raise DuplicateTuple(rid, container_object, member)
		return rid

	def _insert(
		self,
		rid: RelationshipId,
		container_object: Any,
		member: Member,
	) -> None:
		self._direct[rid].setdefault(container_object, set()).add(member)
		# Update the reverse index
		self._memberships.setdefault(member, set()).add(
			Membership(rid, container_object)
		)
		logger.debug(f"Wrote {container_object}#{rid}@{member}")

	# Read operations

	def contains_direct(
		self,
		relationship: RelationshipId | str,
		container_object: Any,
		member: Member,
	) -> bool:
		"""Check if a tuple exists, ignoring composition rules."""
		rid = self.schema.resolve(relationship)
		members = self._direct[rid].get(container_object)
		return members is not None and member in members

	def contains_object_directly(
		self,
		relationship: RelationshipId | str,
		container_object: Any,
		child: Any,
	) -> bool:
		return self.contains_direct(
			relationship, container_object, Member.object(child)
		)

	def contains_user_directly(
		self,
		relationship: RelationshipId | str,
		container_object: Any,
		user: Any,
	) -> bool:
		return self.contains_direct(
			relationship, container_object, Member.user(user)
		)

	def list_direct_members(
		self,
		relationship: RelationshipId | str,
		container_object: Any,
	) -> list[Member]:
		"""Get direct members of (relationship, object), objects first."""
		rid = self.schema.resolve(relationship)
		return sorted(self._direct[rid].get(container_object, ()))

	def lookup_memberships_of(self, member: Member) -> list[Membership]:
		"""Get every (relationship, object) the member directly belongs to."""
		return sorted(self._memberships.get(member, ()))

	def object_lookup_memberships(self, object_id: Any) -> list[Membership]:
		return self.lookup_memberships_of(Member.object(object_id))

	def user_lookup_memberships(self, user: Any) -> list[Membership]:
		return self.lookup_memberships_of(Member.user(user))

	# Check

	def check(
		self,
		relationship: RelationshipId | str,
		object_id: Any,
		user: Any,
	) -> bool:
		"""Check if user holds relationship on object, directly or not."""
		return self.checker.check(relationship, object_id, user).allowed

	def check_detailed(
		self,
		relationship: RelationshipId | str,
		object_id: Any,
		user: Any,
	) -> CheckResult:
		"""Like check(), but also report how the answer was reached."""
		return self.checker.check(relationship, object_id, user)
