"""Interactive chooser backed by questionary."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import questionary

from eaws.core.exceptions import SelectionCancelledError

logger = logging.getLogger(__name__)

PROMPT_STYLE = questionary.Style(
    [
        ("qmark", "fg:ansiblue bold"),
        ("pointer", "fg:ansigreen bold"),
        ("highlighted", "fg:ansigreen bold"),
        ("answer", "fg:ansigreen bold"),
    ]
)


class QuestionaryChooser:
    """Single-choice list prompt rendered in the terminal."""

    def __init__(self, style: questionary.Style | None = None) -> None:
        self.style = style or PROMPT_STYLE

    def choose(self, label: str, candidates: Sequence[str]) -> str:
        """Ask the user to pick one of ``candidates``.

        Parameters
        ----------
        label : str
            Prompt text, e.g. ``"Select cluster"``
        candidates : Sequence[str]
            Display names to choose from

        Returns
        -------
        str
            The chosen display name

        Raises
        ------
        SelectionCancelledError
            If the prompt is interrupted or dismissed
        """
        answer = questionary.select(
            label,
            choices=list(candidates),
            style=self.style,
        ).ask()

        if answer is None:
            logger.debug("Prompt '%s' cancelled", label)
            raise SelectionCancelledError(label=label)

        return answer
