"""CLI commands for the GitHub REST client."""

import argparse
import json
import logging
import sys


def _add_common(parser):
    parser.add_argument(
        "--skip-cache",
        action="store_true",
        help="Skip reading from cache (still writes to cache)",
    )


def _parse_params(parser, raw: list[str]) -> list[tuple[str, str]]:
    params = []
    for p in raw:
        k, sep, v = p.partition("=")
        if not sep or not k:
            parser.error(f"--param expects KEY=VALUE, got {p!r}")
        params.append((k, v))
    return params


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="github-rest",
        description="Call the GitHub REST API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every request and retry",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # api subcommand
    api_parser = subparsers.add_parser(
        "api",
        help="Make a generic GitHub REST API call",
    )
    api_parser.add_argument(
        "endpoint",
        help="API endpoint path (e.g., repos/owner/repo/issues)",
    )
    api_parser.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Query parameter (repeatable, e.g., --param per_page=100)",
    )
    api_parser.add_argument(
        "--method",
        default="GET",
        help="HTTP method (default: GET)",
    )
    api_parser.add_argument(
        "--body",
        default=None,
        help="JSON request body",
    )
    api_parser.add_argument(
        "--accept",
        default=None,
        help="Accept header (e.g., a preview media type)",
    )
    api_mode = api_parser.add_mutually_exclusive_group()
    api_mode.add_argument(
        "--all-pages",
        action="store_true",
        help="Follow Link headers and print every page as one list",
    )
    api_mode.add_argument(
        "--extended",
        action="store_true",
        help="Print status and headers with the body; a 404 is reported instead of failing",
    )
    _add_common(api_parser)

    # list-issues subcommand
    issues_parser = subparsers.add_parser(
        "list-issues",
        help="List the issues of a repository",
    )
    issues_parser.add_argument(
        "repository",
        help="Repository as OWNER/REPO or URL",
    )
    issues_parser.add_argument(
        "--state",
        default="open",
        choices=["open", "closed", "all"],
        help="Issue state (default: open)",
    )
    _add_common(issues_parser)

    # gist-starred subcommand
    starred_parser = subparsers.add_parser(
        "gist-starred",
        help="Print whether the authenticated user starred a gist",
    )
    starred_parser.add_argument("gist_id", help="Gist id")

    # set-secret subcommand
    secret_parser = subparsers.add_parser(
        "set-secret",
        help="Create or update an Actions secret; the value is read from stdin",
    )
    secret_parser.add_argument(
        "repository",
        help="Repository as OWNER/REPO or URL",
    )
    secret_parser.add_argument("name", help="Secret name")

    # rate-limit subcommand
    subparsers.add_parser(
        "rate-limit",
        help="Show the current rate limit status",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[github-rest] %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    if args.command is None:
        parser.print_help()
        return

    from . import client as client_mod
    from .errors import GitHubError

    try:
        if args.command == "api":
            body = None
            if args.body is not None:
                try:
                    body = json.loads(args.body)
                except ValueError as e:
                    parser.error(f"--body is not valid JSON: {e}")
            params = _parse_params(parser, args.param)

            client = client_mod.get_client(skip_cache=args.skip_cache)
            if args.all_pages:
                result = client.invoke_multiple(
                    args.endpoint, method=args.method, params=params or None, body=body, accept=args.accept
                )
            elif args.extended:
                resp = client.invoke(
                    args.endpoint,
                    method=args.method,
                    params=params or None,
                    body=body,
                    accept=args.accept,
                    extended=True,
                )
                result = {"status": resp.status, "headers": resp.headers, "body": resp.body}
            else:
                result = client.invoke(
                    args.endpoint, method=args.method, params=params or None, body=body, accept=args.accept
                )
            json.dump(result, sys.stdout, indent=2)
            sys.stdout.write("\n")
        elif args.command == "list-issues":
            from .resources import issues

            client = client_mod.get_client(skip_cache=args.skip_cache)
            repo_kwargs = _repository_kwargs(args.repository)
            result = issues.list_issues(state=args.state, client=client, **repo_kwargs)
            json.dump(result, sys.stdout, indent=2)
            sys.stdout.write("\n")
        elif args.command == "gist-starred":
            from .resources import gists

            starred = gists.is_gist_starred(args.gist_id, client=client_mod.get_client())
            print("true" if starred else "false")
        elif args.command == "set-secret":
            from .resources import secrets

            value = sys.stdin.read().rstrip("\n")
            secrets.set_secret(
                args.name, value, client=client_mod.get_client(), **_repository_kwargs(args.repository)
            )
            print(f"Secret {args.name} set", file=sys.stderr)
        elif args.command == "rate-limit":
            from .resources import rate_limit

            json.dump(rate_limit.get_rate_limit(client=client_mod.get_client()), sys.stdout, indent=2)
            sys.stdout.write("\n")
    except GitHubError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)


def _repository_kwargs(value: str) -> dict:
    if "://" in value or value.startswith("git@"):
        return {"uri": value}
    return {"repo": value}


if __name__ == "__main__":
    main()
