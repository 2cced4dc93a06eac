"""Development entrypoint.

Exposes ``app`` without shadowing the ``weeklydraw`` package.
"""

import os

from weeklydraw import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=int(os.getenv("PORT", "3000")), debug=False, use_reloader=False)
