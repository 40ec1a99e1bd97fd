# navtemplate_cli/main.py
from typing import List, Optional

import typer

from navtemplate.app import AppServices, build_home, create_services, home_menu_items
from navtemplate.config import Config
from navtemplate.errors import NavTemplateError

# Create the main Typer application object
app = typer.Typer(
    name="navtemplate",
    help="Inspect and maintain NavTemplate's shared state.",
    add_completion=False,
)
menu_app = typer.Typer(help="Bottom menu ordering.", add_completion=False)
logs_app = typer.Typer(help="Shared log history.", add_completion=False)
cache_app = typer.Typer(help="Image cache maintenance.", add_completion=False)
app.add_typer(menu_app, name="menu")
app.add_typer(logs_app, name="logs")
app.add_typer(cache_app, name="cache")


class _Context:
    config_file: Optional[str] = None


def _services() -> AppServices:
    try:
        return create_services(Config(_Context.config_file), target="CLI", console_logging=False)
    except NavTemplateError as e:
        typer.echo(f"❌ Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.callback()
def main(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to a config.yaml."),
):
    _Context.config_file = config


# --- menu ---

@menu_app.command("show")
def menu_show():
    """Print the home menu in display order."""
    services = _services()
    items = services.menu_model.sort_menu_items(home_menu_items(services))
    for position, item in enumerate(items):
        saved = services.menu_model.saved_position(item.id)
        marker = "saved" if saved is not None else "default"
        typer.echo(f"{position}. {item.name:<12} {item.unselected_icon:<26} ({marker})")


@menu_app.command("move")
def menu_move(
    from_index: int = typer.Argument(..., help="Current position of the entry."),
    to_index: int = typer.Argument(..., help="Position to move it to."),
):
    """Move a menu entry and save the new order."""
    services = _services()
    items = services.menu_model.sort_menu_items(home_menu_items(services))
    try:
        updated = services.menu_model.move_item(items, from_index, to_index)
    except NavTemplateError as e:
        typer.echo(f"❌ Error: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo("✅ New order: " + ", ".join(item.name for item in updated))


@menu_app.command("reset")
def menu_reset():
    """Forget the saved order."""
    _services().menu_model.reset_menu_order()
    typer.echo("✅ Menu order reset.")


# --- logs ---

@logs_app.command("show")
def logs_show(
    target: Optional[str] = typer.Option(None, "--target", "-t", help="Only show this target."),
):
    """Print the log history, newest first, grouped by target."""
    entries = _services().log_book.get_log_list()
    if target:
        entries = [entry for entry in entries if entry.target == target]
    if not entries:
        typer.echo("No logs.")
        return
    for entry in entries:
        typer.echo(f"== {entry.target} ({len(entry.logs)})")
        for line in entry.logs:
            typer.echo(f"  {line}")


@logs_app.command("clear")
def logs_clear():
    """Delete the log history."""
    _services().log_book.clear_logs()
    typer.echo("✅ Logs cleared.")


# --- cache ---

@cache_app.command("prune")
def cache_prune(
    folder: str = typer.Argument(..., help="Cache folder, e.g. 'projecticon' or 'web'."),
    keep: Optional[List[str]] = typer.Argument(None, help="Filenames still in use."),
):
    """Remove cached images of FOLDER that are not listed in KEEP."""
    removed = _services().image_cache.remove_unused_images(folder, keep or [])
    typer.echo(f"✅ Removed {removed} image(s) from '{folder}'.")


# --- rendering ---

@app.command()
def render(
    tap: Optional[List[int]] = typer.Option(None, "--tap", help="Tap the entry at this position (repeatable)."),
):
    """Print the home screen HTML after the given taps."""
    home = build_home(_services())
    for index in tap or []:
        if not home.tap(index):
            typer.echo(f"⚠️  Ignored tap on position {index}", err=True)
    typer.echo(home.render())
    typer.echo(f"<!-- {home.selection.snapshot()} -->")
    home.dispose()


@app.command()
def preview():
    """Open the home screen in a desktop window."""
    # Qt is only imported when a window is actually requested.
    from navtemplate.window.webwidget import run_preview

    home = build_home(_services())
    raise typer.Exit(code=run_preview(home))


if __name__ == "__main__":
    app()
