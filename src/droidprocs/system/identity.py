"""
User name to uid resolution.

The passwd database is consulted first. On Android, bionic's getpwnam
synthesises entries from the fixed AID table and the per-user app naming
scheme; the same rules are applied here when the database has no entry, so
uids resolve identically on- and off-device.
"""

import logging
import os
import pwd
import re

logger = logging.getLogger(__name__)

AID_ROOT = 0
AID_SYSTEM = 1000
AID_READPROC = 3009
AID_NOBODY = 9999
AID_APP_START = 10000
AID_ISOLATED_START = 99000
AID_USER_OFFSET = 100000

UNKNOWN_UID = -1

# Fixed Android ids (system/core/include/private/android_filesystem_config.h).
ANDROID_IDS = {
    "root": AID_ROOT,
    "system": AID_SYSTEM,
    "radio": 1001,
    "bluetooth": 1002,
    "graphics": 1003,
    "input": 1004,
    "audio": 1005,
    "camera": 1006,
    "log": 1007,
    "compass": 1008,
    "mount": 1009,
    "wifi": 1010,
    "adb": 1011,
    "install": 1012,
    "media": 1013,
    "dhcp": 1014,
    "sdcard_rw": 1015,
    "vpn": 1016,
    "keystore": 1017,
    "usb": 1018,
    "drm": 1019,
    "mdnsr": 1020,
    "gps": 1021,
    "media_rw": 1023,
    "mtp": 1024,
    "drmrpc": 1026,
    "nfc": 1027,
    "sdcard_r": 1028,
    "clat": 1029,
    "loop_radio": 1030,
    "mediadrm": 1031,
    "package_info": 1032,
    "sdcard_pics": 1033,
    "sdcard_av": 1034,
    "sdcard_all": 1035,
    "logd": 1036,
    "shared_relro": 1037,
    "dbus": 1038,
    "tlsdate": 1039,
    "mediaex": 1040,
    "audioserver": 1041,
    "metrics_coll": 1042,
    "metricsd": 1043,
    "webserv": 1044,
    "debuggerd": 1045,
    "mediacodec": 1046,
    "cameraserver": 1047,
    "shell": 2000,
    "cache": 2001,
    "diag": 2002,
    "net_bt_admin": 3001,
    "net_bt": 3002,
    "inet": 3003,
    "net_raw": 3004,
    "net_admin": 3005,
    "net_bw_stats": 3006,
    "net_bw_acct": 3007,
    "net_bt_stack": 3008,
    "readproc": AID_READPROC,
    "wakelock": 3010,
    "everybody": 9997,
    "misc": 9998,
    "nobody": AID_NOBODY,
}

_MULTI_USER_APP = re.compile(r"^u(\d+)_a(\d+)$")
_MULTI_USER_ISOLATED = re.compile(r"^u(\d+)_i(\d+)$")
_MULTI_USER_AID = re.compile(r"^u(\d+)_([a-z_]+)$")
_LEGACY_APP = re.compile(r"^app_(\d+)$")


def android_uid_for_name(name: str) -> int:
    """
    Resolve a name with Android's naming rules only.

    Returns:
        The uid, or -1 if the name follows none of the conventions.
    """
    if name in ANDROID_IDS:
        return ANDROID_IDS[name]

    match = _MULTI_USER_APP.match(name)
    if match:
        return int(match.group(1)) * AID_USER_OFFSET + AID_APP_START + int(match.group(2))

    match = _MULTI_USER_ISOLATED.match(name)
    if match:
        return int(match.group(1)) * AID_USER_OFFSET + AID_ISOLATED_START + int(match.group(2))

    match = _LEGACY_APP.match(name)
    if match:
        return AID_APP_START + int(match.group(1))

    match = _MULTI_USER_AID.match(name)
    if match and match.group(2) in ANDROID_IDS:
        return int(match.group(1)) * AID_USER_OFFSET + ANDROID_IDS[match.group(2)]

    return UNKNOWN_UID


def uid_for_name(name: str, use_passwd: bool = True) -> int:
    """
    Resolve a user name to a uid.

    Args:
        name: User name as printed by ps, e.g. 'u0_a52', 'system', 'app_12'.
        use_passwd: Consult the passwd database before the Android rules.

    Returns:
        The uid, or -1 if the name is unknown.
    """
    if use_passwd:
        try:
            return pwd.getpwnam(name).pw_uid
        except KeyError:
            pass
    uid = android_uid_for_name(name)
    if uid == UNKNOWN_UID:
        logger.debug(f"No uid known for user name '{name}'")
    return uid


def current_uid() -> int:
    """Real uid of the calling process."""
    return os.getuid()


def app_id(uid: int) -> int:
    """Strip the user part of a multi-user uid (u10_a52 -> 10052)."""
    return uid % AID_USER_OFFSET
