import os
import subprocess
from sqlalchemy.engine import make_url

# Shown once per process, even when create_app() runs several times
_banner_shown = False

BANNER = r"""
 __  __      ____            _
|  \/  | ___|  _ \ __ _  __| |
| |\/| |/ _ \ |_) / _` |/ _` |
| |  | |  __/  __/ (_| | (_| |
|_|  |_|\___|_|   \__,_|\__,_|
"""


def get_git_hash():
    """Short commit hash from the build environment, or from git in a checkout"""
    if os.environ.get('GIT_HASH'):
        return os.environ['GIT_HASH'][:8]
    try:
        return subprocess.check_output(['git', 'rev-parse', '--short=8', 'HEAD'],
                                       stderr=subprocess.DEVNULL).decode().strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        return "unknown"


def describe_runtime(config):
    """Which backends this instance talks to (no secrets)"""
    database = make_url(config['SQLALCHEMY_DATABASE_URI'])
    return [
        ('Database', f"{database.get_backend_name()} {database.database or ''}".strip()),
        ('Mail', config.get('MAIL_SERVER') or 'simulation mode'),
        ('Assistant', config.get('GEMINI_MODEL') if config.get('GEMINI_API_KEY') else 'simulation mode'),
        ('Origins', ', '.join(config.get('CORS_ALLOWED_ORIGINS', []))),
    ]


def print_startup_banner(config):
    global _banner_shown

    if _banner_shown or config.get('TESTING'):
        return
    _banner_shown = True

    print("\033[96m" + BANNER + "\033[0m")
    print("\033[94m" + "=" * 50 + "\033[0m")
    print(f"   Git Hash:   {get_git_hash()}")
    for label, value in describe_runtime(config):
        print(f"   {label + ':':<11} {value}")
    print("\033[94m" + "=" * 50 + "\033[0m")
    print("\033[93mStarting MePad API...\033[0m")
    print()
