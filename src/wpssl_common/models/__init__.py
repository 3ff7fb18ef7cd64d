"""Shared Pydantic models."""

from wpssl_common.models.distribution import DistributionInfo, DistroFamily, family_of
from wpssl_common.models.environment import CertificateBundle, TargetEnvironment
from wpssl_common.models.setup_params import SetupParameters
from wpssl_common.models.setup_run import Outcome, SetupRun, StepRecord

__all__ = [
    "CertificateBundle",
    "DistributionInfo",
    "DistroFamily",
    "Outcome",
    "SetupParameters",
    "SetupRun",
    "StepRecord",
    "TargetEnvironment",
    "family_of",
]
