from __future__ import annotations


class GroupManagerException(Exception): ...


class InvalidConfigException(GroupManagerException): ...


class CandidateQueryError(GroupManagerException):
    """
    Reading the users or their group memberships failed. Nothing was modified.
    """

    ...


class ApplyChangesError(GroupManagerException):
    """
    The transaction applying membership changes failed and was rolled back.
    None of the computed changes were persisted.
    """

    ...
