# Overview: Flask CLI commands for inspecting the shop's data store.

# backend/repairshop/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to repairshop (PowerShell: $env:FLASK_APP="repairshop").
# - Use: python -m flask <group> <command> [options]
#
# The data store is in memory, so every command sees a freshly seeded
# store (SEED_SAMPLE_DATA=1) or an empty one.
#
# Shop inspection:
# - python -m flask shop summary
#   Record counts per collection plus the data store version.
# - python -m flask shop low-stock [--store-id store-1]
#   Inventory items at or below their reorder level.
# - python -m flask shop pending-requests
#   Inventory update requests waiting for owner review.
# - python -m flask shop users
#   Users with role and bound store.

import click
from flask.cli import with_appcontext

from .extensions import get_data_store
from .services import query_service


@click.group('shop')
def shop_group():
    """Repair shop inspection commands."""


@shop_group.command('summary')
@with_appcontext
def summary():
    """Show record counts per collection."""
    store = get_data_store()
    click.echo(f"Data store version: {store.version}")
    for name, count in store.counts().items():
        click.echo(f"  {name:<10} {count}")


@shop_group.command('low-stock')
@click.option('--store-id', help='Only items of this store')
@with_appcontext
def low_stock(store_id):
    """List inventory items at or below their reorder level."""
    items = query_service.low_stock_items(get_data_store().inventory)
    if store_id:
        items = [item for item in items if item.store_id == store_id]

    if not items:
        click.echo("No low-stock items.")
        return

    click.echo("\n" + "="*80)
    click.echo(f"{'ID':<10} {'Store':<10} {'Name':<40} {'Qty':>5} {'Reorder':>8}")
    click.echo("="*80)
    for item in items:
        click.echo(f"{item.id:<10} {item.store_id:<10} {item.name:<40} {item.quantity:>5} {item.reorder_level:>8}")
    click.echo("="*80 + "\n")


@shop_group.command('pending-requests')
@with_appcontext
def pending_requests():
    """List inventory update requests awaiting review."""
    rows = query_service.pending_requests(get_data_store().inventory)
    if not rows:
        click.echo("No pending requests.")
        return

    for row in rows:
        click.echo(
            f"{row['id']:<8} {row['item_id']:<8} {row['quantity_change']:+d} "
            f"by user {row['requested_by']}: {row['reason']}"
        )


@shop_group.command('users')
@with_appcontext
def list_users():
    """List all users with their role and store."""
    users = get_data_store().users
    if not users:
        click.echo("No users found.")
        return

    click.echo("\n" + "="*80)
    click.echo(f"{'ID':<5} {'Email':<30} {'Role':<8} {'Store':<10} {'Active'}")
    click.echo("="*80)
    for user in users:
        active_str = "Yes" if user.is_active else "No"
        click.echo(f"{user.id:<5} {user.email:<30} {user.role:<8} {user.store_id or 'all':<10} {active_str}")
    click.echo("="*80 + "\n")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(shop_group)
