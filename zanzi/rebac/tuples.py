# (c) Copyright Datacraft, 2026
"""Members, memberships and relationship tuple keys."""
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from .exceptions import InvalidTuple
from .schema import RelationshipId


class MemberKind(str, Enum):
	"""Kind of a member. Objects sort before users."""
	OBJECT = 'object'
	USER = 'user'


@dataclass(frozen=True, order=True)
class Member:
	"""
	Whoever or whatever holds a relationship: an object or a user.

	Ordered by kind (objects first), then by identifier.
	"""
	kind: MemberKind
	id: Any

	@classmethod
	def object(cls, object_id: Any) -> "Member":
		return cls(MemberKind.OBJECT, object_id)

	@classmethod
	def user(cls, user_id: Any) -> "Member":
		return cls(MemberKind.USER, user_id)

	def __str__(self):
		return f"{self.kind.value}:{self.id}"


@dataclass(frozen=True, order=True)
class Membership:
	"""Reverse index entry: the member holds `relationship` on `object`."""
	relationship: RelationshipId
	object: Any

	def __str__(self):
		return f"{self.object}#{self.relationship}"


class TupleKey(BaseModel):
	"""
	Textual relationship tuple.

	Format: object#relation@kind:id
	Example: dir1#owner@user:alice
	         dir1#parent@object:doc123
	"""
	model_config = ConfigDict(frozen=True)

	object_id: str
	relation: str
	member_kind: MemberKind
	member_id: str

	def __str__(self):
		return (
			f"{self.object_id}#{self.relation}"
			f"@{self.member_kind.value}:{self.member_id}"
		)

	@property
	def member(self) -> Member:
		return Member(self.member_kind, self.member_id)

	@classmethod
	def parse(cls, tuple_str: str) -> "TupleKey":
		"""
		Parse tuple from string format.

		Object ids may contain ':'; the member part is split at the
		first ':' only.
		"""
		if tuple_str.count('@') != 1:
			raise InvalidTuple(f"Expected exactly one '@' in {tuple_str!r}")
		object_part, member_part = tuple_str.split('@')

		object_id, sep, relation = object_part.rpartition('#')
		if not sep or not object_id or not relation:
			raise InvalidTuple(f"Expected object#relation in {tuple_str!r}")

		kind, sep, member_id = member_part.partition(':')
		if not sep or not member_id:
			raise InvalidTuple(f"Expected kind:id member in {tuple_str!r}")
		try:
			member_kind = MemberKind(kind)
		except ValueError:
			raise InvalidTuple(
				f"Unknown member kind {kind!r} in {tuple_str!r}"
			) from None

		return cls(
			object_id=object_id,
			relation=relation,
			member_kind=member_kind,
			member_id=member_id,
		)
