from __future__ import annotations

from dataclasses import dataclass

from .activity.repository import ActivityLogger, MongoActivityLogRepository
from .attendance.mongo_aggregate_repository import MongoAggregateRepository
from .attendance.service import AttendanceRecorder
from .core.settings import AppSettings
from .database.connection import DBConfig, DatabaseConnection
from .database.mongo import MongoConnection
from .ledger.mysql_ledger_service import MySQLLedgerService
from .ledger.partitions import LedgerPartitionManager
from .sessions.codec import TokenCodec
from .sessions.gate import SessionGate
from .users.mongo_user_repository import MongoUserRepository
from .users.service import AccountService
from .verification.mailer import Mailer, SmtpMailer
from .verification.mongo_code_repository import MongoVerificationCodeRepository
from .verification.service import VerificationCodeService
from .whitelist.mongo_whitelist_repository import MongoWhitelistRepository
from .whitelist.service import WhitelistService


@dataclass(frozen=True)
class Container:
    settings: AppSettings

    codec: TokenCodec
    gate: SessionGate

    whitelist_service: WhitelistService
    attendance_recorder: AttendanceRecorder
    verification_service: VerificationCodeService
    account_service: AccountService


def build_container(*, settings: AppSettings, mailer: Mailer | None = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(settings.db_config))
    mongo = MongoConnection.get_instance(settings.mongo_uri, settings.mongo_db)

    ledger = MySQLLedgerService(conn)
    whitelist_repo = MongoWhitelistRepository(mongo)
    aggregates_repo = MongoAggregateRepository(mongo)
    codes_repo = MongoVerificationCodeRepository(mongo)
    users_repo = MongoUserRepository(mongo)
    activity = ActivityLogger(MongoActivityLogRepository(mongo))

    codec = TokenCodec(secret=settings.session_secret, secure_cookies=settings.secure_cookies)
    gate = SessionGate(codec)

    partitions = LedgerPartitionManager(ledger, settings.ledger_id)
    verification_service = VerificationCodeService(codes_repo, mailer or SmtpMailer(settings.mail))

    return Container(
        settings=settings,
        codec=codec,
        gate=gate,
        whitelist_service=WhitelistService(whitelist_repo, activity),
        attendance_recorder=AttendanceRecorder(
            partitions,
            whitelist_repo,
            aggregates_repo,
            verify_whitelist=settings.verify_whitelist,
        ),
        verification_service=verification_service,
        account_service=AccountService(users_repo, verification_service, activity),
    )
