"""meta-task CLI: new, focus, done and list."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import typer
from rich.console import Console

from metatask import __version__
from metatask.config import Settings
from metatask.controller import TaskLifecycleController
from metatask.errors import MetaTaskError
from metatask.gateway import ExternalToolGateway
from metatask.probe import is_inside_session
from metatask.registry import TaskRegistry
from metatask.tasks import finish_task, focus_task, list_tasks, new_task, require_task

TASK_NAME_HELP = "the name of the task"
DONE_PROMPT = (
    "Are you sure you are done with this task? This will kill the tmux session "
    "(the git branch is kept)."
)

app = typer.Typer(
    name="meta-task",
    help="Track tasks as a tmux session plus a git branch of the same name.",
    no_args_is_help=True,
)
console = Console()


@dataclass
class Runtime:
    """Per-invocation state shared by the commands."""

    settings: Settings
    registry: TaskRegistry
    gateway: ExternalToolGateway

    @property
    def controller(self) -> TaskLifecycleController:
        return TaskLifecycleController(self.gateway)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )


def build_gateway(settings: Settings) -> ExternalToolGateway:
    return ExternalToolGateway(tmux=settings.tmux_bin, git=settings.git_bin)


def _fail(exc: Exception) -> typer.Exit:
    typer.echo(str(exc), err=True)
    return typer.Exit(1)


def _runtime(ctx: typer.Context) -> Runtime:
    runtime = ctx.find_object(Runtime)
    if runtime is None:
        raise typer.Exit(1)
    return runtime


def _persist(registry: TaskRegistry) -> None:
    """Save only after a transition fully succeeded and changed the registry."""
    if not registry.dirty:
        return
    try:
        registry.save()
    except MetaTaskError as exc:
        raise _fail(exc) from exc


def _version_option_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def _cli_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every tmux/git invocation to stderr.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show meta-task version and exit.",
        is_eager=True,
        callback=_version_option_callback,
    ),
) -> None:
    """Load settings and the task registry once per invocation."""
    _ = version
    settings = Settings.from_env()
    configure_logging("DEBUG" if verbose else settings.log_level)
    try:
        registry = TaskRegistry.load(settings.registry_path)
    except MetaTaskError as exc:
        raise _fail(exc) from exc
    ctx.obj = Runtime(settings=settings, registry=registry, gateway=build_gateway(settings))


@app.command("new")
def new(
    ctx: typer.Context,
    task_name: str = typer.Argument(..., metavar="TASK_NAME", help=TASK_NAME_HELP),
) -> None:
    """Create a new task: detached tmux session, attach or switch, then `git checkout -b`."""
    runtime = _runtime(ctx)
    try:
        inside = is_inside_session(variable=runtime.settings.session_env_var)
        new_task(
            task_name,
            registry=runtime.registry,
            controller=runtime.controller,
            inside_session=inside,
        )
    except MetaTaskError as exc:
        raise _fail(exc) from exc
    _persist(runtime.registry)
    console.print(f"[green]Created new task:[/green] {task_name}", highlight=False)


@app.command("focus")
def focus(
    ctx: typer.Context,
    task_name: str = typer.Argument(..., metavar="TASK_NAME", help=TASK_NAME_HELP),
) -> None:
    """Focus on a task by attaching to (or switching to) its tmux session."""
    runtime = _runtime(ctx)
    try:
        inside = is_inside_session(variable=runtime.settings.session_env_var)
        focus_task(
            task_name,
            registry=runtime.registry,
            controller=runtime.controller,
            inside_session=inside,
        )
    except MetaTaskError as exc:
        raise _fail(exc) from exc


@app.command("done")
def done(
    ctx: typer.Context,
    task_name: str = typer.Argument(..., metavar="TASK_NAME", help=TASK_NAME_HELP),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """Finish a task by killing its tmux session. The git branch is left alone."""
    runtime = _runtime(ctx)
    try:
        require_task(task_name, registry=runtime.registry)
    except MetaTaskError as exc:
        raise _fail(exc) from exc

    if not yes and not typer.confirm(DONE_PROMPT, default=False):
        console.print("[dim]Nothing changed.[/dim]")
        raise typer.Exit(0)

    try:
        finish_task(task_name, registry=runtime.registry, controller=runtime.controller)
    except MetaTaskError as exc:
        raise _fail(exc) from exc
    _persist(runtime.registry)
    console.print(f"[green]Task done:[/green] {task_name}", highlight=False)


@app.command("list")
def list_cmd(ctx: typer.Context) -> None:
    """List tmux sessions and all known tasks."""
    runtime = _runtime(ctx)
    listing = list_tasks(registry=runtime.registry, gateway=runtime.gateway)
    for line in listing.lines():
        typer.echo(line)


def main() -> None:
    app(prog_name="meta-task")
