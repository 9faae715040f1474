"""Savings project commands."""

import click

from ledgerkit.cli.account_resolution import resolve_account_or_exit, resolve_project_or_exit
from ledgerkit.cli.context import get_clock, get_store, now, save
from ledgerkit.cli.date_filters import parse_datetime_or_exit
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.entities import Priority, Project, ProjectType
from ledgerkit.domain.errors import DomainError
from ledgerkit.domain.project import ProjectService
from ledgerkit.domain.store import new_id
from ledgerkit.utils.amount_parser import parse_amount

PROJECT_TYPES = [t.value for t in ProjectType]
PRIORITIES = [p.value for p in Priority]


def _parse_amount_or_exit(ctx, value: str, label: str):
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


@click.group()
def project_group():
    """Manage savings projects."""
    pass


@project_group.command("create")
@click.argument("name", metavar="PROJECT_NAME")
@click.option("--type", "project_type", type=click.Choice(PROJECT_TYPES), default="custom", show_default=True, help="Project type")
@click.option("--target", "target_amount", required=True, help="Target amount")
@click.option("--current", "current_amount", default="0", show_default=True, help="Amount saved so far")
@click.option("--priority", type=click.Choice(PRIORITIES), default="medium", show_default=True, help="Priority")
@click.option("--target-date", help="Deadline (YYYY-MM-DD or relative like 'next year')")
@click.option("--account", help="Linked account name or ID")
@click.option("--id", "project_id", help="Project ID (auto-generated if not provided)")
@click.pass_context
def create_project(
    ctx,
    name: str,
    project_type: str,
    target_amount: str,
    current_amount: str,
    priority: str,
    target_date: str | None,
    account: str | None,
    project_id: str | None,
):
    """Create a savings project.

    Examples:
        ledgerkit project create "Car" --type car_purchase --target 1500000 --priority high
        ledgerkit project create "Plot" --type land_buy --target 800000 --target-date 2027-06-30
    """
    store = get_store(ctx)
    current = now(ctx)

    project = Project(
        id=project_id or new_id(),
        name=name,
        project_type=ProjectType(project_type),
        target_amount=_parse_amount_or_exit(ctx, target_amount, "target amount"),
        current_amount=_parse_amount_or_exit(ctx, current_amount, "current amount"),
        priority=Priority(priority),
        created_at=current,
        target_date=parse_datetime_or_exit(ctx, target_date, current.date(), "target date") if target_date else None,
        linked_account_id=resolve_account_or_exit(ctx, store, account).id if account else None,
    )

    try:
        store.add_project(project)
    except DomainError as e:
        handle_domain_error(ctx, e)

    save(ctx)
    click.echo(f"Created project '{name}' (ID: {project.id})")


@project_group.command("list")
@click.pass_context
def list_projects(ctx):
    """List projects by priority with their progress."""
    store = get_store(ctx)
    service = ProjectService(store, clock=get_clock(ctx))

    projects = service.list_projects_by_priority()
    if not projects:
        click.echo("No projects found.")
        return

    click.echo("\nProjects:")
    click.echo("-" * 100)
    for proj in projects:
        progress = service.get_progress(proj)
        days_left = service.get_days_left(proj)
        if days_left is None:
            deadline = "no deadline"
        elif days_left < 0:
            deadline = f"{-days_left} days overdue"
        else:
            deadline = f"{days_left} days left"
        click.echo(
            f"{proj.name:20s} | {proj.priority.value:6s} | "
            f"{proj.current_amount:>12,.2f} / {proj.target_amount:<12,.2f} | "
            f"{progress:6.1f}% | {deadline}"
        )


@project_group.command("show")
@click.argument("project", metavar="PROJECT")
@click.pass_context
def show_project(ctx, project: str):
    """Show one project in detail.

    PROJECT can be a project name or ID.
    """
    store = get_store(ctx)
    service = ProjectService(store, clock=get_clock(ctx))
    proj = resolve_project_or_exit(ctx, store, project)

    click.echo(f"\nProject: {proj.name} (ID: {proj.id})")
    click.echo(f"  Type: {proj.project_type.value}")
    click.echo(f"  Priority: {proj.priority.value}")
    click.echo(f"  Saved: {proj.current_amount:,.2f} of {proj.target_amount:,.2f} ({service.get_progress(proj):.1f}%)")
    if proj.target_date is not None:
        click.echo(f"  Target date: {proj.target_date.strftime('%Y-%m-%d')} ({service.get_days_left(proj)} days left)")
    if proj.linked_account_id is not None:
        click.echo(f"  Linked account: {store.resolve_account_name(proj.linked_account_id)}")
    click.echo(f"  Linked transactions total: {service.get_project_contributions(proj.id):,.2f}")


@project_group.command("update")
@click.argument("project", metavar="PROJECT")
@click.option("--name", help="New name")
@click.option("--type", "project_type", type=click.Choice(PROJECT_TYPES), help="New project type")
@click.option("--target", "target_amount", help="New target amount")
@click.option("--current", "current_amount", help="New amount saved so far")
@click.option("--priority", type=click.Choice(PRIORITIES), help="New priority")
@click.option("--target-date", help="New deadline")
@click.option("--account", help="Linked account name or ID, or empty string to unlink")
@click.pass_context
def update_project(
    ctx,
    project: str,
    name: str | None,
    project_type: str | None,
    target_amount: str | None,
    current_amount: str | None,
    priority: str | None,
    target_date: str | None,
    account: str | None,
):
    """Update project fields.

    PROJECT can be a project name or ID.

    Examples:
        ledgerkit project update Car --current 250000
    """
    store = get_store(ctx)
    proj = resolve_project_or_exit(ctx, store, project)

    fields: dict = {}
    if name is not None:
        fields["name"] = name
    if project_type is not None:
        fields["project_type"] = ProjectType(project_type)
    if target_amount is not None:
        fields["target_amount"] = _parse_amount_or_exit(ctx, target_amount, "target amount")
    if current_amount is not None:
        fields["current_amount"] = _parse_amount_or_exit(ctx, current_amount, "current amount")
    if priority is not None:
        fields["priority"] = Priority(priority)
    if target_date is not None:
        fields["target_date"] = parse_datetime_or_exit(ctx, target_date, now(ctx).date(), "target date")
    if account is not None:
        fields["linked_account_id"] = resolve_account_or_exit(ctx, store, account).id if account else None

    if not fields:
        click.echo("Error: No fields to update.", err=True)
        ctx.exit(1)

    store.update_project(proj.id, **fields)
    save(ctx)
    click.echo(f"Updated project '{proj.id}'")


@project_group.command("delete")
@click.argument("project", metavar="PROJECT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_project(ctx, project: str, yes: bool):
    """Delete a project. Linked transactions are kept."""
    store = get_store(ctx)
    proj = resolve_project_or_exit(ctx, store, project)

    if not yes and not click.confirm(f"Are you sure you want to delete project '{proj.name}'?"):
        click.echo("Deletion cancelled.")
        return

    store.delete_project(proj.id)
    save(ctx)
    click.echo(f"Deleted project '{proj.name}'")


def register_commands(cli):
    """Register project commands with main CLI."""
    cli.add_command(project_group, name="project")
