"""Allow ``python -m deepl_api``."""

from deepl_api.cli import run

if __name__ == "__main__":
    run()
