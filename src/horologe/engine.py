"""Execution engine and error aggregation.

``execute`` runs every directive of a compiled sequence against one
value. A directive that fails produces an error fragment in its
position; execution always continues so every failure of a pattern is
reported. ``aggregate`` joins the fragments, or raises one
:class:`~horologe.errors.AggregatedFormatError` carrying all failures.
"""

from __future__ import annotations

import logging
from typing import Union

from horologe.directives import CompiledSequence, Directive, FormatContext
from horologe.errors import AggregatedFormatError, DirectiveExecutionError
from horologe.values import TimeValue


logger = logging.getLogger(__name__)

Fragment = Union[str, DirectiveExecutionError]


def execute(
    sequence: CompiledSequence,
    value: TimeValue,
    context: FormatContext,
) -> list[Fragment]:
    """Apply each directive of a sequence to a value.

    Returns:
        One fragment per directive, in pattern order
    """
    return [_run(directive, value, context) for directive in sequence.directives]


def _run(directive: Directive, value: TimeValue, context: FormatContext) -> Fragment:
    try:
        return directive.render(value, context)
    except DirectiveExecutionError as e:
        return e
    except (IndexError, KeyError, TypeError, ValueError) as e:
        # Out of range fields, e.g. month 13
        return DirectiveExecutionError(
            f"The format symbol {directive.source!r} cannot render the value: {e!r}",
            symbol=directive.symbol,
            count=directive.count,
        )


def aggregate(fragments: list[Fragment]) -> str:
    """Concatenate fragments.

    Raises:
        AggregatedFormatError: If any fragment is an error
    """
    errors = [f for f in fragments if isinstance(f, DirectiveExecutionError)]
    if errors:
        logger.debug("Aggregating %d directive errors", len(errors))
        raise AggregatedFormatError(errors)
    return "".join(fragments)


def run(sequence: CompiledSequence, value: TimeValue, context: FormatContext) -> str:
    """Execute a sequence and aggregate its fragments."""
    return aggregate(execute(sequence, value, context))
