"""
Vote service: the per-resident, per-report vote ledger.

A resident can vote for a report once. Repeat votes are accepted silently as
no-ops. The (report_id, user_id) unique constraint is the source of truth, so
two concurrent requests from the same resident still produce exactly one vote.
"""

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import models.schemas as schemas
from models.exceptions import ReportNotFoundException
from repositories.database import store_errors
from repositories.report_repository import ReportRepository
from repositories.vote_repository import VoteRepository


class VoteService:
    """Service for vote-related business logic."""

    @staticmethod
    def cast_vote(db: Session, report_id: int, user_id: int) -> schemas.VoteResult:
        """
        Record a resident's vote on a report.

        The vote insert and the vote_count increment commit together or not
        at all.

        Args:
            db: Database session
            report_id: Report ID
            user_id: Voter's user ID

        Returns:
            VoteResult with accepted=False and the unchanged count when the
            resident had already voted

        Raises:
            ReportNotFoundException: If report not found
            StoreUnavailableException: If the store failed mid-operation
        """
        report_repo = ReportRepository(db)
        vote_repo = VoteRepository(db)

        with store_errors(db, "cast_vote"):
            if not report_repo.exists(report_id):
                raise ReportNotFoundException(report_id)

            if vote_repo.get_by_report_and_user(report_id, user_id):
                logger.info(
                    f"Duplicate vote ignored: user {user_id} on report {report_id}"
                )
                return schemas.VoteResult(
                    accepted=False, new_count=report_repo.get_vote_count(report_id)
                )

            try:
                vote_repo.insert(report_id, user_id)
            except IntegrityError:
                # Lost the race against a concurrent vote by the same resident
                db.rollback()
                if not report_repo.exists(report_id):
                    raise ReportNotFoundException(report_id)
                logger.info(
                    f"Concurrent duplicate vote ignored: user {user_id} on report {report_id}"
                )
                return schemas.VoteResult(
                    accepted=False, new_count=report_repo.get_vote_count(report_id)
                )

            if report_repo.increment_vote_count(report_id) == 0:
                # Report deleted after the existence check
                db.rollback()
                raise ReportNotFoundException(report_id)
            report_repo.commit()
            new_count = report_repo.get_vote_count(report_id)

        logger.info(f"Vote accepted: user {user_id} on report {report_id} ({new_count})")
        return schemas.VoteResult(accepted=True, new_count=new_count)

    @staticmethod
    def has_voted(db: Session, report_id: int, user_id: int) -> bool:
        """Check whether a resident has voted on a report. No side effects."""
        with store_errors(db, "has_voted"):
            vote = VoteRepository(db).get_by_report_and_user(report_id, user_id)
        return vote is not None

    @staticmethod
    def count_votes_by_user(db: Session, user_id: int) -> int:
        """Count votes a resident has cast."""
        with store_errors(db, "count_votes_by_user"):
            return VoteRepository(db).count_by_user(user_id)
