"""
Entry point for the Deployment Console log viewer.
"""

import argparse
import logging

from devconsole.config import APP_NAME


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=f"{APP_NAME} – deployment log viewer")
    parser.add_argument("organization")
    parser.add_argument("project")
    parser.add_argument("stack")
    parser.add_argument("deployment_id")
    parser.add_argument("--api-url", default=None, help="Console API base URL (saved for next time)")
    parser.add_argument("--token", default=None, help="Access token sent as a Bearer header (this run only, not saved)")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from devconsole.services import settings

    if args.api_url:
        settings.set_api_url(args.api_url)
    if args.token:
        settings.use_access_token(args.token)

    from devconsole.app import App
    from devconsole.ui.deployment_logs_view import DeploymentLogsView

    app = App()
    key = (args.organization, args.project, args.stack, args.deployment_id)
    app.show(DeploymentLogsView(app, key=key))
    app.mainloop()


if __name__ == "__main__":
    main()
