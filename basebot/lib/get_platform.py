import os
import sys


def is_android():
    return os.path.exists("/system/app/") and os.path.exists("/system/priv-app")


def get_platform():
    if sys.platform == "darwin":
        return "osx"
    elif is_android():
        return "android"
    elif sys.platform.startswith("linux"):
        return "linux"
    elif sys.platform.startswith("win"):
        return "windows"
    else:
        return "unknown"


def get_data_directory():
    """
    Returns the writable data directory for basebot.
    Windows: %APPDATA%/basebot
    Linux/Mac: ~/.basebot
    """
    if get_platform() == "windows":
        path = os.path.join(os.environ.get("APPDATA", os.path.expanduser("~")), "basebot")
    else:
        path = os.path.expanduser("~/.basebot")

    if not os.path.exists(path):
        os.makedirs(path)

    return path
