import argparse
import logging
import sys

from git_shelf.application.catalog import RepositoryCatalog, default_root_dir
from git_shelf.domain.errors import ShelfError
from git_shelf.infrastructure.git_cli_runner import DEFAULT_TIMEOUT, GitCliRunner


def _parse_timeout(value: str) -> float:
    """Parse a positive number of seconds."""
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid timeout '{value}'. Use seconds, e.g. 30")
    if seconds <= 0:
        raise argparse.ArgumentTypeError(f"Timeout must be positive, got '{value}'")
    return seconds


def _error_exit(msg: str) -> None:
    """Print error message to stderr and exit with code 1."""
    print(f"Error: {msg}", file=sys.stderr)
    sys.exit(1)


def _not_found(name: str) -> None:
    _error_exit(f"repository not found: {name}")


def _print_repos(repos) -> None:
    if not repos:
        print("No repositories found.")
        return

    name_width = max(len("Repository"), *(len(r.name) for r in repos))
    header = f"{'Repository':<{name_width}}  Head"
    print(header)
    print("-" * len(header))
    for r in repos:
        print(f"{r.name:<{name_width}}  {r.head}")
        for path in r.files or []:
            print(f"{'':<{name_width}}    {path}")


def _print_repo(repo, branches) -> None:
    print(f"Repository: {repo.name}")
    print(f"Head:       {repo.head}")
    print(f"Branches:   {', '.join(branches) if branches else '(none)'}")
    print()
    if not repo.files:
        print("No files.")
        return
    print(f"--- Files ({len(repo.files)}) ---\n")
    for path in repo.files:
        print(path)


def _print_commits(repo, commits) -> None:
    print(f"Repository: {repo.name}")
    print(f"Head:       {repo.head}")
    print()
    if not commits:
        print("No commits found.")
        return
    for c in commits:
        print(f"{c.hash}  {c.message}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-shelf",
        description="Browse a directory of bare git repositories",
    )
    parser.add_argument(
        "--root",
        default=default_root_dir(),
        metavar="DIR",
        help="Directory holding one bare repository per subdirectory "
             "(default: $GIT_SHELF_ROOT or /home/git)",
    )
    parser.add_argument(
        "--suffix",
        default="",
        metavar="SUFFIX",
        help="Only treat directories ending in SUFFIX as repositories, e.g. .git",
    )
    parser.add_argument(
        "--timeout",
        type=_parse_timeout,
        default=DEFAULT_TIMEOUT,
        metavar="SECONDS",
        help=f"Limit for each git invocation (default: {DEFAULT_TIMEOUT:g})",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every git failure and lookup",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="List repositories and their heads")
    p_list.add_argument("--files", action="store_true", help="Also list tracked files")
    p_list.add_argument(
        "--skip-failures",
        action="store_true",
        help="Leave out repositories git cannot read instead of failing",
    )

    p_show = sub.add_parser("show", help="Show head, branches and files of a repository")
    p_show.add_argument("name")
    p_show.add_argument("ref", nargs="?", default="", help="Reference to browse (default: head)")

    p_branches = sub.add_parser("branches", help="List local branches")
    p_branches.add_argument("name")

    p_commits = sub.add_parser("commits", help="List commit history")
    p_commits.add_argument("name")
    p_commits.add_argument("ref", nargs="?", default="", help="Reference to start from (default: head)")

    p_serve = sub.add_parser("serve", help="Serve the JSON API (requires pip install git-shelf[web])")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=5000, metavar="PORT")

    return parser


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        try:
            from git_shelf.web.server import launch
        except ImportError:
            _error_exit(
                "web dependencies not installed. "
                "Run: pip install git-shelf[web]"
            )
        launch(
            root_dir=args.root, suffix=args.suffix, timeout=args.timeout,
            host=args.host, port=args.port,
        )
        return

    catalog = RepositoryCatalog(
        args.root, runner=GitCliRunner(timeout=args.timeout), suffix=args.suffix,
    )

    try:
        if args.command == "list":
            repos = catalog.list_repositories(
                include_files=args.files, skip_failures=args.skip_failures,
            )
            _print_repos(repos)
        elif args.command == "show":
            repo = catalog.get_repository(args.name, args.ref, include_files=True)
            if repo is None:
                _not_found(args.name)
            _print_repo(repo, catalog.branches(args.name))
        elif args.command == "branches":
            branches = catalog.branches(args.name)
            if branches is None:
                _not_found(args.name)
            for name in branches:
                print(name)
        elif args.command == "commits":
            repo = catalog.get_repository(args.name, args.ref)
            if repo is None:
                _not_found(args.name)
            _print_commits(repo, catalog.commits(args.name, repo.head))
    except FileNotFoundError as e:
        _error_exit(f"repository root does not exist: {e.filename}")
    except ShelfError as e:
        _error_exit(str(e))


if __name__ == "__main__":
    main()
