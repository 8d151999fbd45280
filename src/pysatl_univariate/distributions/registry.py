"""
Characteristic Graph Registry
=============================

A directed graph over characteristic names for a fixed
:class:`~pysatl_univariate.types.DistributionType`.

- Nodes: ``GenericCharacteristicName``.
- Edges: unary :class:`~pysatl_univariate.distributions.computation.ComputationMethod`
  (``1 source -> 1 target``).

The computation strategy uses the graph to derive a characteristic that a
distribution does not provide analytically: it searches the shortest chain of
conversions starting at any analytical characteristic and ending at the
requested one.

The module also exposes a singleton-like :class:`DistributionTypeRegister`
with a default configuration for the univariate continuous case (see
:data:`~pysatl_univariate.distributions.computation.CONTINUOUS_CONVERSIONS`).

Notes
-----
- Only **unary** edges are supported.
- Registering a second edge for an existing ``(source, target)`` pair under the
  same label keeps the first one and emits a :class:`UserWarning`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import warnings
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field
from functools import lru_cache
from typing import TYPE_CHECKING, Any, ClassVar, Self

from pysatl_univariate.distributions.computation import CONTINUOUS_CONVERSIONS
from pysatl_univariate.types import UnivariateContinuous

if TYPE_CHECKING:
    from pysatl_univariate.distributions.computation import ComputationMethod
    from pysatl_univariate.types import DistributionType, GenericCharacteristicName

logger = logging.getLogger(__name__)

DEFAULT_COMPUTATION_KEY: str = "PySATL_default_computation"
"""Default label for computation edges when no specific label is provided."""


class GraphInvariantError(RuntimeError):
    """Raised when a conversion cannot be represented as a graph edge."""


@dataclass(slots=True, frozen=True)
class GenericCharacteristicRegister:
    """
    Directed characteristic graph for a fixed :class:`DistributionType`.

    Attributes
    ----------
    distribution_type : DistributionType
        Distribution type the graph is built for.

    Notes
    -----
    Edges are stored as nested mappings:
    ``adjacency[src][dst] = dict[method_name, ComputationMethod]``
    with a reserved key :data:`DEFAULT_COMPUTATION_KEY` for the default method.
    """

    distribution_type: DistributionType

    _adj: dict[
        GenericCharacteristicName,
        dict[GenericCharacteristicName, dict[str, ComputationMethod[Any, Any]]],
    ] = field(default_factory=dict, repr=False)

    def _pick_method(
        self, methods: dict[str, ComputationMethod[Any, Any]]
    ) -> ComputationMethod[Any, Any]:
        """Pick a deterministic method for an edge (prefer default key)."""
        if DEFAULT_COMPUTATION_KEY in methods:
            return methods[DEFAULT_COMPUTATION_KEY]
        name = next(iter(sorted(methods.keys())))
        return methods[name]

    def add_conversion(
        self, method: ComputationMethod[Any, Any], *, name: str = DEFAULT_COMPUTATION_KEY
    ) -> None:
        """
        Add a unary conversion (``source -> target``).

        Parameters
        ----------
        method : ComputationMethod
            Unary conversion method (exactly one source).
        name : str
            Method name (edge label).

        Raises
        ------
        GraphInvariantError
            If the method is not unary.
        """
        sources = list(method.sources)
        if len(sources) != 1:
            raise GraphInvariantError(
                "Only unary methods are supported for edges (1 source -> 1 target)."
            )

        src = sources[0]
        self._adj.setdefault(method.target, {})
        methods = self._adj.setdefault(src, {}).setdefault(method.target, {})
        if name in methods:
            warnings.warn(
                f"Conversion {src} -> {method.target} labelled '{name}' is already registered; "
                "the new method is ignored",
                UserWarning,
                stacklevel=2,
            )
            return
        methods[name] = method

    def all_nodes(self) -> frozenset[GenericCharacteristicName]:
        """Return the set of all graph nodes."""
        verts = set(self._adj.keys())
        for nbrs in self._adj.values():
            verts.update(nbrs.keys())
        return frozenset(verts)

    def find_path(
        self,
        src: GenericCharacteristicName,
        dst: GenericCharacteristicName,
    ) -> list[ComputationMethod[Any, Any]] | None:
        """
        Find the shortest conversion chain ``src -> ... -> dst``.

        Parameters
        ----------
        src, dst : str
            Source and destination nodes.

        Returns
        -------
        list[ComputationMethod] or None
            A list of conversions if a path exists, otherwise ``None``.
        """
        found = self.find_shortest_path([src], dst)
        return None if found is None else found[1]

    def find_shortest_path(
        self,
        sources: Iterable[GenericCharacteristicName],
        dst: GenericCharacteristicName,
    ) -> tuple[GenericCharacteristicName, list[ComputationMethod[Any, Any]]] | None:
        """
        Multi-source BFS: the shortest chain from any of ``sources`` to ``dst``.

        Ties are broken by the order of ``sources``.

        Returns
        -------
        tuple[str, list[ComputationMethod]] or None
            The chosen source and the conversions to apply in order,
            or ``None`` if ``dst`` is unreachable.
        """
        starts = list(dict.fromkeys(sources))
        if dst in starts:
            return dst, []

        origin: dict[GenericCharacteristicName, GenericCharacteristicName] = {
            s: s for s in starts
        }
        parent: dict[
            GenericCharacteristicName, tuple[GenericCharacteristicName, ComputationMethod[Any, Any]]
        ] = {}
        q: deque[GenericCharacteristicName] = deque(starts)

        while q:
            v = q.popleft()
            for w, methods in self._adj.get(v, {}).items():
                if w in origin or not methods:
                    continue
                origin[w] = origin[v]
                parent[w] = (v, self._pick_method(methods))
                if w == dst:
                    path: list[ComputationMethod[Any, Any]] = []
                    cur = dst
                    while cur in parent:
                        pv, m = parent[cur]
                        path.append(m)
                        cur = pv
                    path.reverse()
                    return origin[dst], path
                q.append(w)
        return None


class DistributionTypeRegister:
    """Singleton-like registry that maps :class:`DistributionType` to its graph."""

    _instance: ClassVar[Self | None] = None
    _register_kinds: dict[DistributionType, GenericCharacteristicRegister]

    def __new__(cls) -> Self:
        if cls._instance is None:
            self = super().__new__(cls)
            self._register_kinds = {}
            cls._instance = self
        return cls._instance

    def get(self, distribution_type: DistributionType) -> GenericCharacteristicRegister:
        """
        Get (or create) the :class:`GenericCharacteristicRegister` for a distribution type.
        """
        reg = self._register_kinds.get(distribution_type)
        if reg is None:
            reg = GenericCharacteristicRegister(distribution_type=distribution_type)
            self._register_kinds[distribution_type] = reg
        return reg

    __call__ = get


def _configure(reg: DistributionTypeRegister) -> None:
    """Default configuration for the univariate continuous case."""
    reg1C = reg.get(UnivariateContinuous)
    for method in CONTINUOUS_CONVERSIONS:
        reg1C.add_conversion(method)
    logger.debug(
        "Configured %d conversions for %s", len(CONTINUOUS_CONVERSIONS), UnivariateContinuous
    )


@lru_cache(maxsize=1)
def distribution_type_register() -> DistributionTypeRegister:
    """Return a cached :class:`DistributionTypeRegister` instance configured with defaults."""
    reg = DistributionTypeRegister()
    _configure(reg)
    return reg


def reset_characteristic_registry() -> None:
    """Reset the cached distribution type register (test helper)."""
    distribution_type_register.cache_clear()
    DistributionTypeRegister._instance = None
