# vex_fixer/context.py
from contextlib import contextmanager, nullcontext
from typing import Callable, Iterable, Optional, TextIO

import click


class RunContext:
    """
    Everything a run talks to the user through: prompts, console messages and
    the progress bar. Passed explicitly to the pipeline so tests can swap any
    of it out.
    """

    def __init__(
        self,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        color: bool = True,
        show_progress: bool = True,
        prompt_func: Optional[Callable[..., str]] = None,
    ):
        self.out = out
        self.err = err
        self.color = color
        self.show_progress = show_progress
        self._prompt = prompt_func or click.prompt

    @property
    def _color_flag(self):
        # None lets click decide from the stream; False strips ANSI codes
        return None if self.color else False

    def prompt(self, text: str, default: str) -> str:
        value = self._prompt(text, default=default, show_default=True)
        value = (value or "").strip()
        return value or default

    def info(self, message: str):
        click.echo(message, file=self.out, color=self._color_flag)

    def success(self, message: str):
        click.secho(message, file=self.out, fg="green", color=self._color_flag)

    def warn(self, message: str):
        click.secho(message, file=self.out, fg="yellow", color=self._color_flag)

    def error(self, message: str):
        click.secho(message, file=self.err, fg="red", err=self.err is None, color=self._color_flag)

    @contextmanager
    def progress(self, items: Iterable, label: str):
        """Iterates items under a click progress bar (or plainly when progress is off)."""
        if not self.show_progress:
            with nullcontext(items) as plain:
                yield plain
            return
        bar = click.progressbar(
            items,
            label=label,
            file=self.err or click.get_text_stream("stderr"),
            show_pos=True,
            item_show_func=lambda item: str(item) if item is not None else None,
            color=self._color_flag,
        )
        with bar as tracked:
            yield tracked
