"""Allow ``python -m sync_admin``."""

from sync_admin.cli.main import run

if __name__ == "__main__":
    run()
