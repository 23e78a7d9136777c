"""
Process classification: app vs. system process, uid and foreground attribution.
"""

from .classifier import (
    APP_PROCESS_NAME,
    cgroup_uid,
    classify,
    is_app_process_name,
    resolve_app_uid,
    resolve_enhanced_attribution,
)
from .foreground import (
    BACKGROUND_CPU_GROUP,
    CgroupForegroundProbe,
    ForegroundProbe,
    SchedPolicyForegroundProbe,
    default_foreground_probe,
)

__all__ = [
    "APP_PROCESS_NAME",
    "BACKGROUND_CPU_GROUP",
    "CgroupForegroundProbe",
    "ForegroundProbe",
    "SchedPolicyForegroundProbe",
    "cgroup_uid",
    "classify",
    "default_foreground_probe",
    "is_app_process_name",
    "resolve_app_uid",
    "resolve_enhanced_attribution",
]
