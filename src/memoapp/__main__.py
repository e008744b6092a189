"""Entry point: python -m memoapp <command>"""

from memoapp.api.cli.main import app

if __name__ == "__main__":
    app(prog_name="memoapp")
