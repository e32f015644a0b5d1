"""Run the relay under uvicorn: ``python -m mailrelay`` or ``mailrelay``."""

import uvicorn

from mailrelay.config import settings


def main() -> None:
    uvicorn.run(
        "mailrelay.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
