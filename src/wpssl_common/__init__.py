"""wpssl common: shared models, constants, and configuration."""

from wpssl_common.constants import (
    JOURNAL_DB_PATH,
    LETSENCRYPT_LIVE_DIR,
    LOG_DIR,
    RENEWAL_SCHEDULE,
    REQUIRED_PORTS,
    SITES_ROOT,
)
from wpssl_common.config import WpsslConfig
from wpssl_common.models.distribution import DistributionInfo, DistroFamily
from wpssl_common.models.environment import CertificateBundle, TargetEnvironment
from wpssl_common.models.setup_params import SetupParameters
from wpssl_common.models.setup_run import Outcome, SetupRun, StepRecord

__all__ = [
    "CertificateBundle",
    "DistributionInfo",
    "DistroFamily",
    "JOURNAL_DB_PATH",
    "LETSENCRYPT_LIVE_DIR",
    "LOG_DIR",
    "Outcome",
    "RENEWAL_SCHEDULE",
    "REQUIRED_PORTS",
    "SITES_ROOT",
    "SetupParameters",
    "SetupRun",
    "StepRecord",
    "TargetEnvironment",
    "WpsslConfig",
]
