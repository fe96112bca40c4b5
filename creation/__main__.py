"""Entry point: python -m creation [URL_OR_QUERY] [--project-id ID]."""

import argparse
import sys
from pathlib import Path

import questionary
from dotenv import load_dotenv

from core.api import ConsoleClient
from core.catalog import get_catalog
from core.logging_config import setup_logging
from core.secrets import get_api_token, is_keyring_available, set_secret
from core.settings import get_setting, load_settings
from creation.constants import CREATION_CANCELLED, CREATION_FAILED, CREATION_SUCCESS
from creation.params import EntryParams
from creation.ui import STYLE
from creation.wizard import run_wizard


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m creation",
        description="Create a resource in the console, step by step.",
    )
    parser.add_argument(
        "entry",
        nargs="?",
        default="",
        help="Entry URL or query string, e.g. 'resourceType=Konnektr.Graph&tier=free'",
    )
    parser.add_argument(
        "--project-id",
        default=None,
        help="Create inside this project (skips project selection)",
    )
    parser.add_argument(
        "--store-token",
        action="store_true",
        default=False,
        help="Save the console API token in the OS keyring and exit",
    )
    return parser


def _store_token(settings: dict) -> int:
    name = get_setting(settings, "api.token_secret", "CONSOLE_API_TOKEN")
    if not is_keyring_available():
        print(f"No OS keyring available. Set {name} in .env instead.")
        return CREATION_FAILED
    token = questionary.password("Console API token:", style=STYLE).ask()
    if not token:
        return CREATION_CANCELLED
    set_secret(name, token.strip())
    print("Token saved.")
    return CREATION_SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Run the creation wizard. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")
    settings = load_settings()
    setup_logging(project_root, settings)

    if args.store_token:
        return _store_token(settings)

    token = get_api_token(settings)
    if not token:
        print("No API token found; requests will be unauthenticated.")
    client = ConsoleClient(
        get_setting(settings, "api.base_url"),
        token=token,
        timeout=float(get_setting(settings, "api.timeout", 15.0)),
    )

    try:
        result = run_wizard(
            client,
            entry=EntryParams.from_query(args.entry),
            fixed_project_id=args.project_id,
            settings=settings,
            catalog=get_catalog(settings, project_root),
        )
    except KeyboardInterrupt:
        print("\n\nCreation cancelled.")
        return CREATION_CANCELLED

    if result.success and result.resource is not None:
        resource = result.resource
        print(f"\n✅ {resource.name} ({resource.resource_id}) created.\n")
        if result.configure_access:
            print(
                "Grant access at "
                f"/projects/{resource.project_id}/resources/{resource.resource_id}/access\n"
            )
        return CREATION_SUCCESS

    if result.error:
        print(f"\n{result.error}")
        return CREATION_FAILED

    print("\nCreation cancelled.")
    return CREATION_CANCELLED


if __name__ == "__main__":
    sys.exit(main())
