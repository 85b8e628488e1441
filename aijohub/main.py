import asyncio
import getpass
import shlex
import sys
from typing import Dict, List

from dependency_injector.wiring import inject, Provide

from aijohub.app_containers import ApplicationContainer
from aijohub.core.logger import logger
from aijohub.core.settings import settings
from aijohub.v1_0.controllers import AppShell, SupplierFormController
from aijohub.v1_0.entities import (
    Editing,
    Failed,
    Loaded,
    Loading,
    LoginView,
    ShellView,
    SupplierDTO,
)
from aijohub.v1_0.schemas import SupplierSearch

LABELS: Dict[str, str] = {
    "id": "ID",
    "nama": "Nama Supplier",
    "alamat": "Alamat",
    "telepon": "Telepon",
    "email": "Email",
    "npwp": "NPWP",
}

HELP = """Perintah:
  list | reset                       tampilkan semua supplier
  search nama=.. alamat=.. telepon=..  cari supplier
  add                                tambah supplier
  edit <id>                          ubah supplier
  logout | quit | help"""


def create_app() -> ApplicationContainer:
    container = ApplicationContainer()
    # __name__ is "__main__" under `python -m`, so wire this module object itself
    container.wire(modules=[sys.modules[__name__]])
    logger.info(
        "%s %s starting in %s api=%s",
        settings.APP_NAME,
        settings.APP_VERSION,
        settings.APP_ENV,
        settings.API_BASE_URL,
    )
    return container


def render_table(rows: List[SupplierDTO]) -> str:
    cols = ["id", "nama", "alamat", "telepon", "email", "npwp"]
    widths = {c: max([len(LABELS[c])] + [len(getattr(r, c)) for r in rows]) for c in cols}
    line = lambda values: " | ".join(v.ljust(widths[c]) for c, v in zip(cols, values))
    out = [line([LABELS[c] for c in cols]), "-+-".join("-" * widths[c] for c in cols)]
    out += [line([getattr(r, c) for c in cols]) for r in rows]
    return "\n".join(out)


def render(view: ShellView) -> str:
    if isinstance(view, LoginView):
        head = "== AijoHub Login =="
        return f"{head}\n{view.error}" if view.error else head

    out = [f"== Manajemen Supplier Kain == (login: {view.username})"]
    st = view.suppliers
    if isinstance(st, Loading):
        out.append("Memuat data...")
    elif isinstance(st, Failed):
        out.append(f"Error: {st.message}")
    elif isinstance(st, Loaded) and st.items:
        out.append(render_table(list(st.items)))
    else:
        out.append("Tidak ada data supplier.")
    if isinstance(view.form, Editing) and view.form.error_message:
        out.append(f"Gagal: {view.form.error_message}")
    return "\n".join(out)


async def _ask(prompt: str, default: str = "") -> str:
    text = await asyncio.to_thread(input, f"{prompt} [{default}]: " if default else f"{prompt}: ")
    return text.strip() or default


async def _login(shell: AppShell) -> None:
    username = await _ask("Username")
    password = await asyncio.to_thread(getpass.getpass, "Password: ")
    await shell.login(username, password)
    print(render(shell.view))


async def _fill_and_submit(form: SupplierFormController) -> None:
    while isinstance(form.state, Editing):
        for name in SupplierDTO.editable_fields():
            form.set_field(name, await _ask(LABELS[name], getattr(form.state.draft, name)))
        if await form.submit() is not None:
            return
        print(f"Gagal: {form.state.error_message}")
        if (await _ask("Ulangi? (y/n)", "y")).lower() != "y":
            form.close()


async def _dispatch(shell: AppShell, line: str) -> bool:
    try:
        parts = shlex.split(line)
    except ValueError as e:
        print(f"Perintah tidak valid: {e}")
        return True
    if not parts:
        return True
    cmd, args = parts[0].lower(), parts[1:]
    if cmd in ("quit", "exit"):
        return False
    if cmd == "help":
        print(HELP)
        return True
    suppliers, form = shell.suppliers, shell.form
    if suppliers is None or form is None:
        # session ended; run() goes back to the login prompt
        return True
    if cmd == "logout":
        shell.logout()
    elif cmd in ("list", "reset"):
        await suppliers.reset()
    elif cmd == "search":
        fields = dict(a.split("=", 1) for a in args if "=" in a)
        unknown = set(fields) - {"nama", "alamat", "telepon"}
        if unknown:
            print(f"Field pencarian tidak dikenal: {', '.join(sorted(unknown))}")
            return True
        await suppliers.search(SupplierSearch(**fields))
    elif cmd == "add":
        form.open_add()
        await _fill_and_submit(form)
    elif cmd == "edit" and args:
        record = next((s for s in suppliers.items if s.id == args[0]), None)
        if record is None:
            print(f"Supplier {args[0]} tidak ada di tabel.")
            return True
        form.open_edit(record)
        await _fill_and_submit(form)
    else:
        print(HELP)
        return True
    print(render(shell.view))
    return True


@inject
async def run(
    shell: AppShell = Provide[ApplicationContainer.api_container.app_shell],
) -> None:
    print(render(await shell.start()))
    while True:
        if isinstance(shell.view, LoginView):
            await _login(shell)
            continue
        if not await _dispatch(shell, await _ask("aijohub")):
            break


def main() -> None:
    container = create_app()
    try:
        asyncio.run(run())
    except (KeyboardInterrupt, EOFError):
        print()
    finally:
        logger.info(f"{settings.APP_NAME} shutdown")
        container.unwire()


if __name__ == "__main__":
    main()
