#!/usr/bin/env python3
"""
Church CRM - Command Line Entry Point

Usage:
    # Run the API server
    church-crm serve --port 3002

    # Create tables, add missing columns, seed the admin account
    church-crm setup-db --sample-data

    # Scan for members missing recent Sabbath services and draft outreach
    church-crm retention --url http://localhost:3002 --email admin@ssda.org --draft
"""

import argparse
import asyncio
import getpass
import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("church-crm")


def run_server(args):
    """Run the API server with uvicorn."""
    import uvicorn

    uvicorn.run("church_crm.main:app", host=args.host, port=args.port, reload=args.reload)


def run_setup_db(args):
    """Create the schema and seed initial data."""
    from church_crm.services.database_service import db_service
    from church_crm.services.seed import DEFAULT_ADMIN_EMAIL, seed_admin, seed_sample_data

    try:
        added = db_service.initialize()
        if added:
            logger.info(f"Added columns: {', '.join(added)}")

        if not args.no_admin and seed_admin(db_service):
            print(f"Seeded admin user: {DEFAULT_ADMIN_EMAIL} (change the password after first login)")

        if args.sample_data:
            seed_sample_data(db_service)
    except Exception as e:
        logger.error(f"Database setup failed: {e}")
        sys.exit(1)
    finally:
        db_service.close()


async def run_retention(args):
    """Log in, load everything, list absentees and optionally draft messages."""
    from church_crm.client import ChurchAPIError, ChurchClient, ChurchDataStore

    email = args.email or os.getenv("CHURCH_CRM_EMAIL")
    if not email:
        logger.error("Email required. Use --email or set CHURCH_CRM_EMAIL env var")
        sys.exit(1)
    password = os.getenv("CHURCH_CRM_PASSWORD") or getpass.getpass("Password: ")

    async with ChurchClient(args.url) as client:
        try:
            await client.login(email, password)
        except ChurchAPIError as e:
            logger.error(f"Login failed: {e.message}")
            sys.exit(1)

        store = ChurchDataStore(client)
        await store.initialize()
        absentees = store.scan_for_absentees()

        if not absentees:
            print("\nEveryone was present at one of the last Sabbath services.")
            return

        dates = ", ".join(absentees[0].missed_events) or "no services on record"
        print(f"\nActive members absent from the last services ({dates}):")
        print("=" * 50)
        for absentee in absentees:
            member = absentee.member
            print(f"- {member.full_name} ({member.phone or 'no phone'}, {member.email or 'no email'})")
            if args.draft:
                message = await store.draft_outreach(absentee)
                print("\n" + message + "\n" + "-" * 50)


def main():
    parser = argparse.ArgumentParser(
        description="Church CRM - members, communities, events and giving"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", "-H", default="0.0.0.0")
    serve_parser.add_argument("--port", "-p", type=int, default=int(os.getenv("PORT", "3002")))
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    # Setup command
    setup_parser = subparsers.add_parser("setup-db", help="Create tables and seed data")
    setup_parser.add_argument("--sample-data", action="store_true", help="Insert the sample congregation")
    setup_parser.add_argument("--no-admin", action="store_true", help="Skip the default admin account")

    # Retention command
    retention_parser = subparsers.add_parser("retention", help="Scan for absent members")
    retention_parser.add_argument(
        "--url", "-u", default=os.getenv("CHURCH_CRM_URL", "http://localhost:3002"), help="API server URL"
    )
    retention_parser.add_argument("--email", "-e", help="Login email")
    retention_parser.add_argument("--draft", "-d", action="store_true", help="Draft outreach messages")

    args = parser.parse_args()

    if args.command == "serve":
        run_server(args)
    elif args.command == "setup-db":
        run_setup_db(args)
    elif args.command == "retention":
        asyncio.run(run_retention(args))
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
