"""heaverc command line: the heaverd-ng client.

Flags only populate a `RunContext` and an `OperationQueue`; everything else
happens in `core.services.orchestrator`. Results are printed as they arrive
and the exit code reflects whether every operation succeeded.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
from pathlib import Path

import typer
from rich.console import Console

from cli.ui_components import build_log_handler, print_completion, print_error, print_result
from core.config import VERSION, AppSettings, load_config_file
from core.domain.context import RunContext
from core.domain.results import RunCompleted
from core.errors import ConfigError
from core.services.operations import (
    Create,
    Destroy,
    ListContainers,
    ListHosts,
    ListPools,
    Start,
    Stop,
)
from core.services.orchestrator import run as run_queue
from core.services.queue import OperationQueue

START_STOP_ERROR = "Cannot start and stop container simultaneously (-ST given)"

app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
    help="heaverc, the heaverd-ng client.",
)

_out = Console()
_err = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[build_log_handler(_err)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        _out.print(f"heaverc {VERSION}", highlight=False)
        raise typer.Exit()


def build_queue(
    *,
    create: bool = False,
    start: bool = False,
    stop: bool = False,
    destroy: bool = False,
    list_containers: bool = False,
    list_hosts: bool = False,
    list_pools: bool = False,
    images: list[str] | None = None,
    key_path: str | None = None,
    raw_key: str | None = None,
) -> OperationQueue:
    """Queue operations in lifecycle order, then attach create parameters."""

    queue = OperationQueue()
    if create:
        queue.enqueue(Create())
    if start:
        queue.enqueue(Start())
    if stop:
        queue.enqueue(Stop())
    if destroy:
        queue.enqueue(Destroy())
    if list_containers:
        queue.enqueue(ListContainers())
    if list_hosts:
        queue.enqueue(ListHosts())
    if list_pools:
        queue.enqueue(ListPools())

    if images:
        queue.set_image(images)
    if key_path:
        queue.set_key_path(key_path)
    if raw_key:
        queue.set_raw_key(raw_key)
    return queue


def _interrupt_handler(loop: asyncio.AbstractEventLoop, cancel: asyncio.Event):
    """First Ctrl-C cancels the queue; the next one interrupts as usual."""

    def handle() -> None:
        cancel.set()
        loop.remove_signal_handler(signal.SIGINT)

    return handle


async def _consume(queue: OperationQueue, context: RunContext, settings: AppSettings) -> RunCompleted:
    cancel = asyncio.Event()
    loop = asyncio.get_running_loop()
    # Signal handlers are unavailable on Windows event loops.
    with contextlib.suppress(NotImplementedError):
        loop.add_signal_handler(signal.SIGINT, _interrupt_handler(loop, cancel))

    try:
        async for event in run_queue(queue, context, settings=settings, cancel=cancel):
            if isinstance(event, RunCompleted):
                return event
            print_result(event, out=_out, err=_err)
    finally:
        with contextlib.suppress(NotImplementedError):
            loop.remove_signal_handler(signal.SIGINT)
    raise RuntimeError("result stream ended without RunCompleted")


@app.command()
def main(
    create: bool = typer.Option(False, "-C", "--create", help="Create container."),
    start: bool = typer.Option(False, "-S", "--start", help="Start container."),
    stop: bool = typer.Option(False, "-T", "--stop", help="Stop container."),
    destroy: bool = typer.Option(False, "-D", "--destroy", help="Destroy container."),
    list_containers: bool = typer.Option(False, "-L", "--list", help="List containers."),
    list_hosts: bool = typer.Option(False, "-H", "--host-list", help="List hosts."),
    list_pools: bool = typer.Option(False, "-P", "--pool-list", help="List pools."),
    name: str = typer.Option("", "-n", "--name", help="Name of container."),
    images: list[str] | None = typer.Option(None, "-i", "--image", help="Image(s) for container."),
    host: str = typer.Option("", "--host", help="Host to operate on."),
    pool: str = typer.Option("", "--pool", help="Pool to create container on."),
    key: str | None = typer.Option(
        None, "-k", "--key", help="Public ssh key file (added to root's authorized keys)."
    ),
    raw_key: str | None = typer.Option(None, "--raw-key", help="Public ssh key as string."),
    config: Path | None = typer.Option(None, "--config", help="Configuration file (TOML, [api] base_url)."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the requests instead of sending them."),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Debug logging on stderr."),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit."
    ),
) -> None:
    """Create, start, stop, destroy and list containers on heaverd-ng."""

    _configure_logging(verbose)

    if start and stop:
        print_error(START_STOP_ERROR, err=_err)
        raise typer.Exit(code=1)

    queue = build_queue(
        create=create,
        start=start,
        stop=stop,
        destroy=destroy,
        list_containers=list_containers,
        list_hosts=list_hosts,
        list_pools=list_pools,
        images=images,
        key_path=key,
        raw_key=raw_key,
    )
    if not len(queue):
        raise typer.BadParameter("no operation given (use -C, -S, -T, -D, -L, -H or -P)")

    settings = AppSettings()
    api_base_url = settings.api_base_url
    if config is not None:
        try:
            api_base_url = load_config_file(config)
        except ConfigError as exc:
            print_error(exc.message, err=_err)
            raise typer.Exit(code=1) from exc

    context = RunContext(
        container_name=name,
        pool_name=pool,
        host_name=host,
        api_base_url=api_base_url,
        dry_run=dry_run,
    )

    completed = asyncio.run(_consume(queue, context, settings))
    print_completion(completed, out=_out, err=_err)
    if not completed.ok:
        raise typer.Exit(code=1)


def run() -> None:
    app()
