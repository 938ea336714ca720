# (c) Copyright Datacraft, 2026
"""Relationship graph traversal and membership checking."""
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from zanzi.config import get_settings
from .exceptions import CycleDetected, MaxDepthExceeded
from .schema import RelationshipId
from .tuples import Member

if TYPE_CHECKING:
	from .store import RelationshipStore

logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
	"""Result of a membership check."""
	allowed: bool
	path: list[str] = field(default_factory=list)
	evaluation_count: int = 0
	# A branch looped back onto the resolution path and was skipped
	unresolved: bool = field(default=False, repr=False)


@dataclass
class _Resolution:
	"""Bookkeeping for one top-level check."""
	in_progress: set[tuple] = field(default_factory=set)
	proven_false: set[tuple] = field(default_factory=set)
	cycle_path: list[str] | None = None
	evaluation_count: int = 0


class RelationshipChecker:
	"""
	Check membership using relationship graph traversal.

	A user holds relationship R on object O if any of these hold:
	- Direct: the user is a direct member of (R, O)
	- Implication: the user holds a relationship contained in R on O
	- Inheritance: O is a member of some object O2 through an edge
	  relationship listed in R's inherited set, and the user holds R on O2

	Rules are tried in that order and the first success wins. A branch
	that loops back onto the resolution path is skipped; the check only
	fails with CycleDetected when no other branch proves membership.
	"""

	def __init__(
		self,
		store: "RelationshipStore",
		max_depth: int | None = None,
	):
		if max_depth is None:
			max_depth = get_settings().max_check_depth
		if max_depth < 1:
			raise ValueError(f"max_depth must be at least 1, got {max_depth}")
		self.store = store
		self.max_depth = max_depth

	def check(
		self,
		relationship: RelationshipId | str,
		object_id: Any,
		user: Any,
	) -> CheckResult:
		"""
		Check if user holds relationship on object.

		Args:
			relationship: Relationship to check (viewer, editor, etc.)
			object_id: ID of the object
			user: ID of the user

		Returns:
			CheckResult with allowed status and path

		Raises:
			UnknownRelationship: a relationship reached during resolution
				is not defined
			CycleDetected: membership was not proven and some branch
				looped back onto its own path
			MaxDepthExceeded: resolution nested deeper than max_depth
		"""
		rid = self.store.schema.resolve(relationship)
		resolution = _Resolution()
		result = self._check_recursive(
			relationship=rid,
			object_id=object_id,
			member=Member.user(user),
			path=[],
			resolution=resolution,
			depth=0,
		)
		result.evaluation_count = resolution.evaluation_count

		if not result.allowed and result.unresolved:
			logger.warning(
				f"Cycle detected checking {' -> '.join(resolution.cycle_path)}"
			)
			raise CycleDetected(resolution.cycle_path)

		logger.debug(
			f"check {object_id}#{rid}@user:{user} -> {result.allowed} "
			f"({resolution.evaluation_count} evaluated)"
		)
		return result

	def _check_recursive(
		self,
		relationship: RelationshipId,
		object_id: Any,
		member: Member,
		path: list[str],
		resolution: _Resolution,
		depth: int,
	) -> CheckResult:
		"""Recursive check with cycle detection."""
		node = (relationship, object_id)
		current_path = path + [f"{object_id}#{relationship}"]

		if node in resolution.in_progress:
			logger.debug(f"Skipping loop {' -> '.join(current_path)}")
			if resolution.cycle_path is None:
				resolution.cycle_path = current_path
			return CheckResult(allowed=False, path=current_path, unresolved=True)
		if depth > self.max_depth:
			logger.warning(f"Max depth reached checking {object_id}#{relationship}")
			raise MaxDepthExceeded(self.max_depth, current_path)
		if node in resolution.proven_false:
			return CheckResult(allowed=False, path=current_path)

		definition = self.store.schema.get_definition(relationship)
		resolution.evaluation_count += 1
		resolution.in_progress.add(node)
		unresolved = False
		try:
			# 1. Direct tuple check
			if self.store.contains_direct(relationship, object_id, member):
				return CheckResult(
					allowed=True,
					path=current_path + [f"@{member}"],
				)

			# 2. Contained relationships on the same object
			for contained in sorted(definition.contained):
				sub_result = self._check_recursive(
					relationship=contained,
					object_id=object_id,
					member=member,
					path=current_path,
					resolution=resolution,
					depth=depth + 1,
				)
				if sub_result.allowed:
					return sub_result
				unresolved = unresolved or sub_result.unresolved

			# 3. Inheritance from objects this object is a member of
			if definition.inherited:
				for edge_relationship in definition.inherited:
					self.store.schema.resolve(edge_relationship)
				edges = self.store.lookup_memberships_of(Member.object(object_id))
				for edge in edges:
					if edge.relationship not in definition.inherited:
						continue
					sub_result = self._check_recursive(
						relationship=relationship,
						object_id=edge.object,
						member=member,
						path=current_path + [f"({edge.relationship})"],
						resolution=resolution,
						depth=depth + 1,
					)
					if sub_result.allowed:
						return sub_result
					unresolved = unresolved or sub_result.unresolved
		finally:
			resolution.in_progress.discard(node)

		# Negative answers that skipped a loop are only valid on this path
		if not unresolved:
			resolution.proven_false.add(node)
		return CheckResult(allowed=False, path=current_path, unresolved=unresolved)
