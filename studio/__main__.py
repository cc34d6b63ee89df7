"""Run the studio API: ``python -m studio`` or ``studio-server``."""

import argparse
import os

import uvicorn


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the Ad Variants Studio API")
    parser.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")))
    parser.add_argument("--reload", action="store_true", help="Restart when source files change")
    args = parser.parse_args()

    uvicorn.run("studio.api:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
