"""
Post-install script for setting up browser dependencies.

Downloads the Chromium build Playwright drives and checks that the
Lighthouse CLI is available on PATH.
"""
import shutil
import subprocess
import sys


def postinstall():
    """
    Run playwright install to download browser binaries.

    Lighthouse itself ships through npm, so it is only checked for here.
    """
    print("Checking for browser installation...")

    print("Running 'playwright install chromium'...")
    try:
        result = subprocess.run(
            [sys.executable, "-m", "playwright", "install", "chromium"],
            check=True,
            capture_output=True,
            text=True
        )
        if result.stdout:
            print(result.stdout)
        print("Chromium browser installed successfully.")
    except subprocess.CalledProcessError as e:
        print(f"Error installing Chromium browser for Playwright: {e}", file=sys.stderr)
        if e.stderr:
            print(e.stderr, file=sys.stderr)
        print(
            "Please run the following command manually:\n"
            "  python -m playwright install chromium",
            file=sys.stderr
        )

    if shutil.which("lighthouse") is None:
        print(
            "Lighthouse CLI not found on PATH. Install it with:\n"
            "  npm install -g lighthouse",
            file=sys.stderr
        )
    else:
        print("Lighthouse CLI found.")


if __name__ == "__main__":
    postinstall()
