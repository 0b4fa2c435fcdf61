# cli.py - interactive catalog admin with offline support
import asyncio
import sys
from datetime import datetime
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from catalog_sdk.config import Settings
from catalog_sdk.container import CatalogApp
from catalog_sdk.log import setup_logging
from catalog_sdk.models import (
    CatalogStatistics, MutationResult, PendingOperation, Product, ProductFilters, SyncReport,
)

console = Console()
session: PromptSession = PromptSession()

status_message = "Ready"

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Product]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Products Catalog",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=14)
    table.add_column("Name", style="bold", width=22)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=12)
    table.add_column("Description", width=34)

    for p in products:
        pid = f"{p.id} [yellow](local)[/yellow]" if p.temporary else str(p.id)
        table.add_row(pid, p.name, f"${p.price:.2f}", p.category, p.description)
    console.print(table)


def show_pending(ops: List[PendingOperation]):
    if not ops:
        console.print("[italic green]Nothing waiting to sync[/italic green]")
        return

    table = Table(title="⏳ Pending operations", box=box.ROUNDED, header_style="bold yellow")
    table.add_column("#", justify="right", width=4)
    table.add_column("Type", width=8)
    table.add_column("Product", width=30)
    table.add_column("Queued at", width=20)
    for i, op in enumerate(ops, 1):
        queued_at = datetime.fromtimestamp(op.timestamp / 1000).strftime("%Y-%m-%d %H:%M:%S")
        label = f"{op.product_id} {op.product.get('name', '')}".strip()
        table.add_row(str(i), op.type.value, label, queued_at)
    console.print(table)


def show_statistics(stats: CatalogStatistics):
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold blue")
    table.add_column("Category")
    table.add_column("Count", justify="right")
    for c in stats.categories:
        table.add_row(c.name, str(c.count))
    console.print(Panel.fit(
        f"Products: [bold]{stats.total_products}[/bold]   "
        f"Total value: [green]${stats.total_value:.2f}[/green]   "
        f"Average: [green]${stats.avg_price:.2f}[/green]",
        title="📊 Statistics", border_style="blue",
    ))
    console.print(table)


def show_result(result: Optional[MutationResult], action: str):
    if result is None:
        return
    if result.errors:
        lines = "\n".join(f"[red]{e.field}[/red]: {e.message}" for e in result.errors)
        console.print(Panel.fit(lines, title="❌ Validation failed", border_style="red"))
        return
    suffix = " [yellow](saved offline, will sync later)[/yellow]" if result.queued else ""
    console.print(Panel.fit(f"[green]{action}[/green] product {result.product.id}{suffix}"))


def show_sync_report(report: Optional[SyncReport]):
    if report is None:
        return
    if report.skipped:
        console.print("[yellow]Sync skipped: offline or already running[/yellow]")
        return
    console.print(Panel.fit(
        f"Synced: [green]{len(report.synced)}[/green]   "
        f"Re-queued: [red]{len(report.failed)}[/red]   "
        f"Dropped: [dim]{len(report.dropped)}[/dim]",
        title="🔄 Sync",
    ))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def offline_banner(app: CatalogApp):
    status = app.monitor.status
    if not status.is_offline:
        return None
    parts = ["🌐 Network connection lost" if status.is_server_available else "🔌 Server unavailable"]
    parts.append("Working in offline mode. Changes will sync when connection is restored.")
    pending = len(app.pending)
    if pending:
        parts.append(f"{pending} change(s) waiting.")
    return Panel(" ".join(parts), style="bold white on dark_orange")


# ---------------------------
# API wrapper
# ---------------------------
async def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Awaits fn(*args, **kwargs) behind a spinner.
    Errors are shown in the status panel and None is returned.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = await fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
async def ask(message: str, completer=None, default: str = "") -> str:
    return (await session.prompt_async(f"{message} ", completer=completer, style=custom_style, default=default)).strip()


async def ask_float(message: str, default: Optional[float] = None) -> Optional[float]:
    while True:
        raw = await ask(message, default="" if default is None else str(default))
        if not raw:
            return default
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


async def ask_int(message: str, default: Optional[int] = None) -> Optional[int]:
    while True:
        raw = await ask(message, default="" if default is None else str(default))
        if not raw:
            return default
        try:
            return int(raw)
        except ValueError:
            console.print("[red]Please enter a whole number.[/red]")


async def confirm(message: str) -> bool:
    answer = await ask(f"{message} [y/N]", completer=WordCompleter(["y", "n"]))
    return answer.lower() in ("y", "yes")


def category_completer(app: CatalogApp):
    return WordCompleter(app.products.get_categories(), ignore_case=True)


def product_completer(app: CatalogApp):
    return WordCompleter([str(p.id) for p in app.cache.read()])


async def ask_product_fields(app: CatalogApp, current: Optional[Product] = None) -> dict:
    current = current or Product(id=0)
    return {
        "name": await ask("Product name", default=current.name),
        "price": await ask_float("💰 Price", default=current.price or None),
        "image": await ask("🖼️ Image URL", default=current.image),
        "description": await ask("Description", default=current.description),
        "category": await ask("🏷️ Category", completer=category_completer(app), default=current.category),
    }


async def ask_filters(app: CatalogApp) -> ProductFilters:
    return ProductFilters(
        category=await ask("Category (blank = any)", completer=category_completer(app)) or None,
        min_price=await ask_float("Min price (blank = none)"),
        max_price=await ask_float("Max price (blank = none)"),
        search_term=await ask("Search term (blank = none)") or None,
        sort_by=await ask("Sort by", completer=WordCompleter(["name", "price", "category"])) or None,
        sort_order=await ask("Sort order", completer=WordCompleter(["asc", "desc"]), default="asc"),
        offset=await ask_int("Offset (blank = 0)"),
        limit=await ask_int("Page size (blank = all)"),
    )


# ---------------------------
# Layout and Header
# ---------------------------
def create_header(app: CatalogApp):
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Catalog Admin",
        f"[bold blue]{app.settings.api_base_url}[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Main menu
# ---------------------------
async def menu(app: CatalogApp):
    global status_message

    console.clear()
    console.print(create_header(app))

    await app.monitor.check_server_status()
    await try_api(app.products.get_products)

    while True:
        banner = offline_banner(app)
        if banner is not None:
            console.print(banner)
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        network = "📴 Simulate network loss" if app.monitor.network_online else "📶 Restore network"
        options = [
            ("1", "📦 List products", "7", "⏳ Pending operations"),
            ("2", "🔍 Filter / sort / page", "8", "🔄 Sync now"),
            ("3", "➕ Create product", "9", "⬆️ Upload file"),
            ("4", "✏️ Update product", "10", "⬇️ Download file"),
            ("5", "🗑️ Delete product", "11", network),
            ("6", "📊 Statistics", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = await ask(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 12)] + ["q", "quit", "exit"])
        )

        if choice == "1":
            products = await try_api(app.products.get_products, success_msg="Products loaded")
            if products is not None:
                show_products(products)

        elif choice == "2":
            filters = await ask_filters(app)
            products = await try_api(app.products.get_products, filters, success_msg="Filtered products loaded")
            if products is not None:
                show_products(products)

        elif choice == "3":
            fields = await ask_product_fields(app)
            result = await try_api(app.products.create_product, fields)
            show_result(result, "Created")

        elif choice == "4":
            pid = await ask_int("Product ID")
            if pid is None:
                continue
            current = app.cache.find(pid)
            fields = await ask_product_fields(app, current)
            result = await try_api(app.products.update_product, pid, fields)
            show_result(result, "Updated")

        elif choice == "5":
            raw = await ask("Product ID", completer=product_completer(app))
            if not raw.isdigit():
                console.print("[red]Please enter a product id.[/red]")
                continue
            if await confirm(f"Delete product {raw}?"):
                result = await try_api(app.products.delete_product, int(raw))
                show_result(result, "Deleted")

        elif choice == "6":
            stats = await try_api(app.products.get_statistics)
            if stats is not None:
                show_statistics(stats)

        elif choice == "7":
            show_pending(app.pending.peek())

        elif choice == "8":
            await try_api(app.monitor.check_server_status)
            report = await try_api(app.sync.drain)
            show_sync_report(report)

        elif choice == "9":
            path = await ask("Path of the file to upload")
            resp = await try_api(asyncio.to_thread, app.files.upload, path, success_msg=f"Uploaded {path}")
            if resp:
                console.print(resp)

        elif choice == "10":
            names = await try_api(asyncio.to_thread, app.files.list_files) or []
            filename = await ask("File to download", completer=WordCompleter(names))
            target = await try_api(
                asyncio.to_thread, app.files.download, filename, app.settings.download_dir,
                success_msg=f"Downloaded {filename}",
            )
            if target:
                console.print(f"Saved to [bold]{target}[/bold]")

        elif choice == "11":
            if app.monitor.network_online:
                app.monitor.handle_offline()
                status_message = "Network marked offline"
            else:
                await app.monitor.handle_online()
                status_message = "Network marked online"

        elif choice.lower() in ("q", "quit", "exit"):
            if await confirm("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye! 👋[/bold green]", title="Goodbye"))
                return

        console.print()
        console.rule(style="dim")


async def main():
    settings = Settings()
    setup_logging(settings.log_level, console=console)
    async with CatalogApp(settings) as app:
        await menu(app)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, EOFError):
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n\n[bold red]Unexpected error: {e}[/bold red]")
        sys.exit(1)
