#!/usr/bin/env python3
"""
Project Registry - operator CLI.

    registry list [--as IDENTITY] [--department N] [--year N]
    registry list --all
    registry show ID [--as IDENTITY]
    registry create --title T --description D --department N --year N [--access LEVEL]
    registry institutions
    registry serve
"""

import argparse
import sys

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

import config
from errors import ProjectNotFound, StoreError
from logging_config import configure_logging
from models import AccessLevel, ProjectRecord

console = Console()

ACCESS_STYLE = {
    AccessLevel.PUBLIC: "green",
    AccessLevel.INSTITUTION: "yellow",
    AccessLevel.PRIVATE: "red",
}


def shorten_identity(identity: str) -> str:
    """0x1234...7890"""
    return f"{identity[:6]}...{identity[-4:]}" if len(identity) > 12 else identity


def access_badge(level: AccessLevel) -> str:
    style = ACCESS_STYLE[level]
    return f"[{style}]{level.label}[/{style}]"


def projects_table(records: list[ProjectRecord], title: str, service) -> Table:
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Title")
    table.add_column("Access")
    table.add_column("Department", style="dim")
    table.add_column("Year", justify="right")
    table.add_column("Authors", style="dim")
    table.add_column("Created", style="dim")

    for r in records:
        table.add_row(
            str(r.id),
            r.title,
            access_badge(r.access_level),
            service.directory.department_name(r.department_id) or str(r.department_id),
            str(r.year),
            ", ".join(shorten_identity(a) for a in r.authors),
            r.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    return table


def list_projects(service, args) -> int:
    if args.all:
        records = service.list_all_unfiltered()
        title = "All projects (unfiltered)"
    else:
        records = service.list_visible(args.viewer, department_id=args.department, year=args.year)
        title = f"Projects visible to {shorten_identity(args.viewer)}" if args.viewer else "Public projects"

    if not records:
        console.print("[dim]No projects to show.[/dim]")
        return 0

    console.print(projects_table(records, title, service))
    return 0


def show_project(service, args) -> int:
    try:
        r = service.get_visible(args.id, args.viewer)
    except ProjectNotFound:
        console.print(f"[red]Project {args.id} not found[/red]")
        return 1

    body = [
        f"[bold]{r.title}[/bold]  {access_badge(r.access_level)}",
        "",
        r.description,
        "",
        f"[dim]Institution:[/dim] {service.directory.institution_name(r.institution_id) or r.institution_id}",
        f"[dim]Department:[/dim]  {service.directory.department_name(r.department_id) or r.department_id}",
        f"[dim]Year:[/dim]        {r.year}",
        f"[dim]Authors:[/dim]     {', '.join(r.authors)}",
        f"[dim]Artifact:[/dim]    {r.artifact_hash}",
        f"[dim]Created:[/dim]     {r.created_at.isoformat(timespec='seconds')}",
    ]
    if r.summary:
        body += ["", f"[italic]{r.summary}[/italic]"]

    console.print(Panel("\n".join(body), title=f"Project {r.id}", box=box.ROUNDED))
    return 0


def create_project(service, args) -> int:
    try:
        level = AccessLevel.parse(args.access)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        return 2

    if not args.author:
        console.print("[yellow]No --author given; a placeholder identity will be fabricated.[/yellow]")

    record = service.publish(
        title=args.title,
        description=args.description,
        department_id=args.department,
        year=args.year,
        access_level=level,
        artifact_hash=args.hash,
        author_identity=args.author,
    )
    console.print(f"[green]Created project {record.id}[/green] by {record.creator_identity}")
    return 0


def list_institutions(service, args) -> int:
    table = Table(title="Institutions", box=box.ROUNDED)
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Institution")
    table.add_column("Departments", style="dim")

    for inst in service.directory.institutions():
        depts = ", ".join(f"{d.id}:{d.name}" for d in service.directory.departments(inst.id))
        table.add_row(str(inst.id), inst.name, depts)

    console.print(table)
    return 0


def serve(service, args) -> int:
    from app import create_app

    console.print(f"[dim]Serving registry API at http://localhost:{args.port}[/dim]")
    create_app(service).run(port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="registry", description="Academic project registry")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("list", help="List projects")
    p.add_argument("--as", dest="viewer", metavar="IDENTITY", help="View as this identity")
    p.add_argument("--all", action="store_true", help="Unfiltered listing (operators only)")
    p.add_argument("--department", type=int)
    p.add_argument("--year", type=int)
    p.set_defaults(func=list_projects)

    p = sub.add_parser("show", help="Show one project")
    p.add_argument("id", type=int)
    p.add_argument("--as", dest="viewer", metavar="IDENTITY")
    p.set_defaults(func=show_project)

    p = sub.add_parser("create", help="Create and publish a project")
    p.add_argument("--title", required=True)
    p.add_argument("--description", required=True)
    p.add_argument("--department", type=int, required=True)
    p.add_argument("--year", type=int, required=True)
    p.add_argument("--access", default="public", help="public | institution | private")
    p.add_argument("--hash", help="Artifact content identifier")
    p.add_argument("--author", help="Author identity")
    p.set_defaults(func=create_project)

    p = sub.add_parser("institutions", help="List institutions and departments")
    p.set_defaults(func=list_institutions)

    p = sub.add_parser("serve", help="Run the HTTP API")
    p.add_argument("--port", type=int, default=config.WEB_PORT)
    p.set_defaults(func=serve)

    return parser


def cli(argv=None, service=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(log_level=config.LOG_LEVEL, environment=config.ENVIRONMENT)

    if service is None:
        from app import build_service
        try:
            service = build_service()
        except StoreError as e:
            console.print(f"[red]Cannot open project store: {e}[/red]")
            return 1

    try:
        return args.func(service, args)
    finally:
        service.close()


if __name__ == "__main__":
    sys.exit(cli())
