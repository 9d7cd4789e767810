import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from contact_store import (
    MAX_NAME_LEN,
    MAX_PHONE_LEN,
    TABLE_SIZE,
    AllocationFailure,
    ContactStore,
    ContactStoreError,
)

# ────────────────────────────────────────────────────────────────────────────
# Rich console
# ────────────────────────────────────────────────────────────────────────────
console = Console()

MENU = {
    "1": "Add Contact",
    "2": "Search Contact",
    "3": "Delete Contact",
    "4": "Display All Contacts",
    "5": "Exit",
}


def setup_logging(level=logging.WARNING):
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


# ────────────────────────────────────────────────────────────────────────────
# Utility helpers
# ────────────────────────────────────────────────────────────────────────────
def ok(msg): return f"[green]SUCCESS: {msg}[/]"


def err(msg): return f"[red]ERROR: {msg}[/]"


def read_field(prompt: str, limit: int) -> str:
    """Read one line, drop the line terminator and keep at most ``limit`` characters."""
    raw = console.input(prompt).rstrip("\r\n")
    return raw[:limit]


def show_menu():
    console.print("\n[bold]--- Contact/Phonebook Menu ---[/]")
    for key, label in MENU.items():
        console.print(f"{key}. {label}")


def show_contacts(store: ContactStore):
    if store.is_empty():
        console.print("[dim]Phonebook is empty.[/]")
        return
    table = Table(title="\n📖 Phonebook Contacts", header_style="bold blue")
    table.add_column("Bucket", justify="right", style="bold cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Phone", style="green", no_wrap=True)
    for index, entry in store.enumerate():
        table.add_row(str(index), escape(entry.name), escape(entry.phone))
    console.print(table)


def input_error(fn):
    def wrap(store, *ctx):
        try:
            return fn(store, *ctx)
        except ContactStoreError as e:
            return err(escape(str(e)))
        except ValueError as e:
            return f"[red]{escape(str(e))}[/]"

    return wrap


# ────────────────────────────────────────────────────────────────────────────
# Handlers
# ────────────────────────────────────────────────────────────────────────────
@input_error
def handle_add(store: ContactStore):
    name = read_field("Enter Name: ", store.max_name_len)
    phone = read_field("Enter Phone: ", store.max_phone_len)
    entry = store.insert(name, phone)
    return ok(f"Added '{escape(entry.name)}' with phone '{escape(entry.phone)}'.")


@input_error
def handle_search(store: ContactStore):
    name = read_field("Enter Name to Search: ", store.max_name_len)
    found = store.search(name)
    if found is None:
        return err(f"Contact '{escape(name)}' not found.")
    return f"[cyan]FOUND:[/] Name: {escape(found.name)}, Phone: {escape(found.phone)}"


@input_error
def handle_delete(store: ContactStore):
    name = read_field("Enter Name to Delete: ", store.max_name_len)
    if store.delete(name):
        return ok(f"Deleted '{escape(name)}'.")
    return err(f"Contact '{escape(name)}' not found.")


@input_error
def handle_display(store: ContactStore):
    show_contacts(store)
    return ""


HANDLERS = {
    1: handle_add,
    2: handle_search,
    3: handle_delete,
    4: handle_display,
}
EXIT_CHOICE = 5


def shutdown(store: ContactStore):
    store.teardown()
    console.print("Phonebook memory freed.")
    console.print("Exiting...")


# ────────────────────────────────────────────────────────────────────────────
# Main loop
# ────────────────────────────────────────────────────────────────────────────
def main(size: int = TABLE_SIZE, max_name_len: int = MAX_NAME_LEN,
         max_phone_len: int = MAX_PHONE_LEN, log_level=logging.WARNING) -> int:
    setup_logging(log_level)
    try:
        store = ContactStore(size, max_name_len, max_phone_len)
    except AllocationFailure as e:
        console.print(err(escape(str(e))))
        return 1

    while True:
        try:
            show_menu()
            raw = console.input("Enter your choice: ").strip()
            try:
                choice = int(raw)
            except ValueError:
                console.print("[yellow]Invalid input. Please enter a number.[/]")
                continue

            if choice == EXIT_CHOICE:
                shutdown(store)
                return 0
            handler = HANDLERS.get(choice)
            if handler is None:
                console.print("[yellow]Invalid choice. Please try again.[/]")
                continue
            res = handler(store)
            if res:
                console.print(res)

        except (KeyboardInterrupt, EOFError):
            console.print("\nInterrupted.")
            shutdown(store)
            return 0


if __name__ == "__main__":
    raise SystemExit(main())
