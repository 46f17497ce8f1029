"""Run caller-supplied async probes under a time box.

Nothing raised by a probe escapes this module: a timeout or error becomes a
failure outcome so the rest of the pipeline can degrade to "no signal".
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Iterable, Mapping, Tuple, Union

from ..contracts import reason_codes
from ..domain.models import Category, UnknownCategoryError
from ..domain.outcome import ProbeOutcome
from . import signal_audit
from .scoring_config import DEFAULT_SCORING_CONFIG, ScoringConfig

_LOG = logging.getLogger(__name__)

Probe = Callable[[], Awaitable[Any]]
ProbeSpec = Tuple[Union[Category, str], Probe]


async def run_probe(
    category: Category | str,
    probe: Probe,
    timeout: float | None = None,
    *,
    config: ScoringConfig | None = None,
) -> ProbeOutcome:
    """Await one probe and wrap its findings or failure.

    ``timeout`` wins over ``config.probe_timeout_seconds``. An unknown
    ``category`` raises :class:`UnknownCategoryError` before the probe starts.
    """

    category = Category.parse(category)
    if timeout is None:
        timeout = (config or DEFAULT_SCORING_CONFIG).probe_timeout_seconds
    try:
        findings = await asyncio.wait_for(probe(), timeout=timeout)
    except asyncio.TimeoutError:
        _LOG.warning("Probe for %s timed out after %ss", category.value, timeout)
        return ProbeOutcome.failure(category, reason_codes.PROBE_TIMEOUT)
    except Exception as exc:
        _LOG.warning("Probe for %s failed: %s", category.value, exc)
        return ProbeOutcome.failure(category, reason_codes.PROBE_ERROR)
    return ProbeOutcome.success(category, findings)


def _known_specs(
    probes: Mapping[Category | str, Probe] | Iterable[ProbeSpec]
) -> list[tuple[Category, Probe]]:
    specs = probes.items() if isinstance(probes, Mapping) else probes
    known = []
    for tag, probe in specs:
        try:
            known.append((Category.parse(tag), probe))
        except UnknownCategoryError:
            _LOG.warning("Not running probe for unknown category %r", tag)
            signal_audit.record_unknown_category(tag)
    return known


async def run_probes(
    probes: Mapping[Category | str, Probe] | Iterable[ProbeSpec],
    *,
    timeout: float | None = None,
    concurrent: bool = True,
    config: ScoringConfig | None = None,
) -> tuple[ProbeOutcome, ...]:
    """Run probes and return their outcomes in input order.

    Probes tagged with an unknown category are skipped before any probe
    starts. ``concurrent=False`` runs them one after another for harnesses
    that cannot evaluate a page from several probes at once.
    """

    specs = _known_specs(probes)
    if concurrent:
        outcomes = await asyncio.gather(
            *(
                run_probe(category, probe, timeout, config=config)
                for category, probe in specs
            )
        )
        return tuple(outcomes)
    results = []
    for category, probe in specs:
        results.append(await run_probe(category, probe, timeout, config=config))
    return tuple(results)
