from __future__ import annotations

import uvicorn

from services.demo.app.settings import SETTINGS


def main() -> None:
    uvicorn.run("services.demo.app.main:app", host=SETTINGS.host, port=SETTINGS.port, log_level=SETTINGS.log_level)


if __name__ == "__main__":
    main()
