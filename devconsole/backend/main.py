"""
Deployment Console – log relay backend (FastAPI).
"""

import argparse
import logging

from devconsole.config import APP_NAME, BACKEND_PORT


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=f"{APP_NAME} log relay")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    parser.add_argument("--port", type=int, default=BACKEND_PORT, help="Port to listen on")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Auto-reload on file changes (dev only)",
    )
    parser.add_argument("--log-level", default="warning", help="Log level for app and uvicorn")
    return parser.parse_args(argv)


def create_app():
    from fastapi import FastAPI
    from fastapi.middleware.cors import CORSMiddleware

    from devconsole.backend.api.deployments import router as deployments_router

    app = FastAPI(title=f"{APP_NAME} Backend")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(deployments_router, prefix="/api/workloads", tags=["deployments"])

    @app.get("/api/health")
    async def health():
        return {"ok": True}

    return app


# Module-level app for uvicorn "devconsole.backend.main:app" (required for --reload)
app = create_app()


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    import uvicorn

    if args.reload:
        uvicorn.run(
            "devconsole.backend.main:app",
            host=args.host,
            port=args.port,
            log_level=args.log_level.lower(),
            reload=True,
        )
    else:
        uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
