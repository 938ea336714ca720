# (c) Copyright Datacraft, 2026
"""Relationship-Based Access Control (ReBAC) - Zanzibar-style module."""
from .builder import Relations, SchemaBuilder, create_document_store
from .exceptions import (
	RelationshipError, UnknownRelationship, DuplicateTuple,
	DuplicateRelationship, SchemaFrozen, InvalidTuple,
	CycleDetected, MaxDepthExceeded
)
from .graph import CheckResult, RelationshipChecker
from .schema import RelationshipId, RelationshipDefinition, RelationshipSchema
from .store import RelationshipStore
from .tuples import Member, MemberKind, Membership, TupleKey

__all__ = [
	'Relations',
	'SchemaBuilder',
	'create_document_store',
	'RelationshipError',
	'UnknownRelationship',
	'DuplicateTuple',
	'DuplicateRelationship',
	'SchemaFrozen',
	'InvalidTuple',
	'CycleDetected',
	'MaxDepthExceeded',
	'CheckResult',
	'RelationshipChecker',
	'RelationshipId',
	'RelationshipDefinition',
	'RelationshipSchema',
	'RelationshipStore',
	'Member',
	'MemberKind',
	'Membership',
	'TupleKey',
]
