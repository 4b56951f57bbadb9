"""
Entry point: `python -m string_analyzer` or the `string-analyzer` script.

Host and port come from the HOST and PORT environment variables
(defaults 0.0.0.0 and 3000).
"""

import uvicorn

from string_analyzer.config import settings


def main() -> None:
    uvicorn.run(
        "string_analyzer.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    main()
