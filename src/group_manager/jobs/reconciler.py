import logging
from typing import List, Sequence

from sqlalchemy.exc import SQLAlchemyError

from group_manager.db.accessors.groups import (
    count_group_members,
    delete_group_member,
    get_demotion_candidates,
    get_promotion_candidates,
    insert_group_member,
    is_group_member,
)
from group_manager.db.accessors.users import (
    count_users,
    count_users_with_balance_at_least,
    count_users_with_balance_below,
    get_balance_aggregates,
)
from group_manager.exceptions import (
    ApplyChangesError,
    CandidateQueryError,
    GroupManagerException,
)
from group_manager.reporting import format_preview
from group_manager.toolkit.timer import Timer
from group_manager.types.db_session import DbSessionFactory
from group_manager.types.reconciliation import (
    GroupStats,
    ReconciliationResult,
    UserCandidate,
)
from group_manager.types.thresholds import Thresholds

LOGGER = logging.getLogger(__name__)


class Reconciler:
    """
    Keeps the membership of the promotion group in line with user balances.

    Users with a balance at or above the promotion amount join the group, members
    whose balance falls strictly below the demotion amount (or who have no balance)
    leave it. Users in between are left alone.
    """

    def __init__(self, session_factory: DbSessionFactory, thresholds: Thresholds):
        self.session_factory = session_factory
        self.thresholds = thresholds

    def find_promotion_candidates(self) -> List[UserCandidate]:
        try:
            with self.session_factory() as session:
                return get_promotion_candidates(
                    session,
                    group_id=self.thresholds.promotion_group_id,
                    min_balance=self.thresholds.promotion_amount,
                )
        except SQLAlchemyError as e:
            LOGGER.exception("Could not fetch promotion candidates.")
            raise CandidateQueryError(
                f"Could not fetch promotion candidates: {e}"
            ) from e

    def find_demotion_candidates(self) -> List[UserCandidate]:
        try:
            with self.session_factory() as session:
                return get_demotion_candidates(
                    session,
                    group_id=self.thresholds.promotion_group_id,
                    max_balance=self.thresholds.demotion_amount,
                )
        except SQLAlchemyError as e:
            LOGGER.exception("Could not fetch demotion candidates.")
            raise CandidateQueryError(
                f"Could not fetch demotion candidates: {e}"
            ) from e

    @staticmethod
    def preview(
        promotions: Sequence[UserCandidate], demotions: Sequence[UserCandidate]
    ) -> List[str]:
        return format_preview(promotions, demotions)

    def apply(
        self,
        promotions: Sequence[UserCandidate],
        demotions: Sequence[UserCandidate],
    ) -> ReconciliationResult:
        """
        Applies membership changes in a single transaction.

        Candidates may be stale: a user that already joined the group is not
        inserted again and a user that already left it is not counted.

        :return: The users actually promoted and demoted.
        :raises ApplyChangesError: if the transaction failed. Nothing is persisted.
        """

        group_id = self.thresholds.promotion_group_id
        result = ReconciliationResult()

        with Timer() as timer, self.session_factory() as session:
            try:
                for user in promotions:
                    if is_group_member(session, user_id=user.id, group_id=group_id):
                        LOGGER.debug(
                            "'%s' is already in group %d.", user.username, group_id
                        )
                        continue

                    insert_group_member(session, user_id=user.id, group_id=group_id)
                    result.promoted_users.append(user)

                for user in demotions:
                    if delete_group_member(session, user_id=user.id, group_id=group_id):
                        result.demoted_users.append(user)
                    else:
                        LOGGER.debug(
                            "'%s' is not in group %d.", user.username, group_id
                        )

                session.commit()

            except SQLAlchemyError as e:
                session.rollback()
                LOGGER.exception("Could not apply group changes, rolled back.")
                raise ApplyChangesError(f"Could not apply group changes: {e}") from e

        result.promoted = len(result.promoted_users)
        result.demoted = len(result.demoted_users)

        for user in result.promoted_users:
            LOGGER.info("Promoted '%s' to group %d.", user.username, group_id)
        for user in result.demoted_users:
            LOGGER.info("Demoted '%s' from group %d.", user.username, group_id)

        LOGGER.info(
            "Applied %d promotions and %d demotions in %.2fs.",
            result.promoted,
            result.demoted,
            timer.elapsed(),
        )
        return result

    def stats(self) -> GroupStats:
        thresholds = self.thresholds

        try:
            with self.session_factory() as session:
                average_balance, highest_balance = get_balance_aggregates(session)
                stats = GroupStats(
                    total_users=count_users(session),
                    group_members=count_group_members(
                        session, thresholds.promotion_group_id
                    ),
                    basic_group_members=count_group_members(
                        session, thresholds.demotion_group_id
                    ),
                    users_above_promotion=count_users_with_balance_at_least(
                        session, thresholds.promotion_amount
                    ),
                    users_below_demotion=count_users_with_balance_below(
                        session, thresholds.demotion_amount
                    ),
                    average_balance=average_balance,
                    highest_balance=highest_balance,
                    pending_promotions=0,
                    pending_demotions=0,
                )
        except SQLAlchemyError as e:
            LOGGER.exception("Could not compute group statistics.")
            raise CandidateQueryError(f"Could not compute group statistics: {e}") from e

        stats.pending_promotions = len(self.find_promotion_candidates())
        stats.pending_demotions = len(self.find_demotion_candidates())
        return stats

    def run(self, dry_run: bool = False) -> ReconciliationResult:
        """
        Performs a full reconciliation pass.

        Failures do not raise, they are reported in the `errors` field of the
        result along with zero changes. In dry-run mode, nothing is applied and
        the candidates are returned in `promoted_users` and `demoted_users`.
        """

        try:
            promotions = self.find_promotion_candidates()
            demotions = self.find_demotion_candidates()

            LOGGER.info(
                "Found %d promotion and %d demotion candidates.",
                len(promotions),
                len(demotions),
            )

            if dry_run:
                return ReconciliationResult(
                    promoted_users=promotions, demoted_users=demotions
                )

            if not promotions and not demotions:
                return ReconciliationResult()

            return self.apply(promotions, demotions)

        except GroupManagerException as e:
            return ReconciliationResult(errors=[str(e)])
