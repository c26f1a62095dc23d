"""Mail relay entry point.

Allows running the server via: python -m mail_relay [--env-file PATH]
"""

from mail_relay.api.main import run

if __name__ == "__main__":
    run()
