"""Logging formatters for eaws."""

import logging


class StageFormatter(logging.Formatter):
    """Logging formatter that prepends the resolution stage from the extra parameter."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with stage prefix if present.

        Parameters
        ----------
        record : logging.LogRecord
            Log record to format

        Returns
        -------
        str
            Formatted log message with optional ``[stage]`` prefix
        """
        msg = super().format(record)
        stage = getattr(record, "stage", None)

        if stage:
            stage_name = getattr(stage, "value", stage)
            return f"[{stage_name}] {msg}"

        return msg
