"""
Base adapter framework for iacmodel.

This module provides the abstract base class for resource-family
adapters, the keyed placeholder cache used to reconcile orphan
satellites, and the AdapterRunner for running several adapters over
one Module Set.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterator, TypeVar

from iacmodel.exceptions import InvalidModuleSetError
from iacmodel.observability.logging import get_logger
from iacmodel.terraform import ModuleSet

logger = get_logger("adapters")

T = TypeVar("T")


class Orphanage(Generic[T]):
    """
    Placeholders for satellites whose primary resource is missing.

    Satellites that point at the same missing target share one
    placeholder; a satellite without a usable key always gets its own.
    Placeholders are kept in the order they were first created. An
    Orphanage lives for a single adapt() call.
    """

    def __init__(self, factory: Callable[[], T]) -> None:
        """
        Initialize the orphanage.

        Args:
            factory: Creates an empty placeholder accumulator
        """
        self._factory = factory
        self._entries: list[T] = []
        self._by_key: dict[str, T] = {}

    def adopt(self, key: str | None) -> tuple[T, bool]:
        """
        Return the placeholder for a key, creating it if needed.

        Args:
            key: Orphan key, or None when the reference is unusable

        Returns:
            Tuple of (placeholder, created)
        """
        if key is not None:
            existing = self._by_key.get(key)
            if existing is not None:
                return existing, False

        entry = self._factory()
        self._entries.append(entry)
        if key is not None:
            self._by_key[key] = entry
        return entry, True

    def __iter__(self) -> Iterator[T]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


@dataclass
class AdaptResult:
    """
    Result from running an adapter.

    Attributes:
        family: Resource family of the adapter that ran
        model: Domain model produced, or None if the adapter failed
        duration_seconds: How long the adaptation took
        errors: List of any errors encountered
    """

    family: str
    model: Any
    duration_seconds: float
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Check if adaptation completed without errors."""
        return len(self.errors) == 0


class Adapter(ABC):
    """
    Abstract base class for resource-family adapters.

    An adapter turns a Module Set into the typed domain model of one
    resource family. Subclasses implement build(); adapt() checks the
    input and logs the run. Adapters hold no state between calls, so a
    single instance may be used from several threads.

    Attributes:
        family: Unique name of the resource family (e.g., "azure.storage")
        primary_types: Block types that produce managed entities
        satellite_types: Block types that attach to a primary entity
    """

    family: str = "base"
    primary_types: tuple[str, ...] = ()
    satellite_types: tuple[str, ...] = ()

    def adapt(self, module_set: ModuleSet) -> Any:
        """
        Adapt a Module Set into this family's domain model.

        Args:
            module_set: Parsed configuration to adapt

        Returns:
            Domain model for the family

        Raises:
            InvalidModuleSetError: If module_set is not a ModuleSet
        """
        if module_set is None:
            raise InvalidModuleSetError(f"{self.family}: module set is required")
        if not isinstance(module_set, ModuleSet):
            raise InvalidModuleSetError(
                f"{self.family}: expected ModuleSet, got {type(module_set).__name__}"
            )

        start_time = time.time()
        logger.adaptation_started(
            self.family,
            module_count=len(module_set),
            block_count=sum(len(m) for m in module_set),
        )
        model = self.build(module_set)
        logger.adaptation_completed(
            self.family,
            entity_count=self.count(model),
            duration_seconds=time.time() - start_time,
        )
        return model

    def __call__(self, module_set: ModuleSet) -> Any:
        return self.adapt(module_set)

    @abstractmethod
    def build(self, module_set: ModuleSet) -> Any:
        """
        Build the domain model from a validated Module Set.

        Must be implemented by all adapter subclasses. Implementations
        must not raise for per-block problems.

        Returns:
            Domain model for the family
        """
        pass

    def count(self, model: Any) -> int:
        """Return the number of top-level entities in a model."""
        return 0

    def _degraded(self, block_address: str, error: Exception) -> None:
        logger.warning(
            f"{self.family}: could not adapt {block_address}, degrading to defaults: "
            f"{type(error).__name__} - {error}",
            family=self.family,
            block=block_address,
        )


class AdapterRunner:
    """
    Runs multiple adapters over one Module Set.

    Adapters are independent and only read the Module Set, so they may
    run in parallel. Results are always returned in adapter order.
    """

    def __init__(self, adapters: list[Adapter]) -> None:
        """
        Initialize the adapter runner.

        Args:
            adapters: List of adapter instances to run
        """
        self._adapters = adapters

    @property
    def adapters(self) -> list[Adapter]:
        """Get the list of adapters."""
        return self._adapters

    def run_adapter(self, adapter: Adapter, module_set: ModuleSet) -> AdaptResult:
        """
        Run a single adapter with timing and error handling.

        Args:
            adapter: Adapter instance to run
            module_set: Module Set to adapt

        Returns:
            AdaptResult with the model and metadata
        """
        start_time = time.time()
        errors: list[str] = []
        model: Any = None

        try:
            model = adapter.adapt(module_set)
        except InvalidModuleSetError:
            raise
        except Exception as e:
            error = f"{adapter.family}: {type(e).__name__} - {str(e)}"
            errors.append(error)
            logger.adaptation_failed(adapter.family, error)

        duration = time.time() - start_time

        return AdaptResult(
            family=adapter.family,
            model=model,
            duration_seconds=duration,
            errors=errors,
        )

    def run_all(
        self,
        module_set: ModuleSet,
        parallel: bool = False,
        max_workers: int = 4,
    ) -> list[AdaptResult]:
        """
        Run all adapters.

        Args:
            module_set: Module Set to adapt
            parallel: Run adapters in a thread pool
            max_workers: Maximum number of worker threads

        Returns:
            List of AdaptResults in adapter order

        Raises:
            InvalidModuleSetError: If module_set is not a ModuleSet
        """
        if not isinstance(module_set, ModuleSet):
            raise InvalidModuleSetError(
                f"Expected ModuleSet, got {type(module_set).__name__}"
            )

        if not parallel or len(self._adapters) <= 1:
            results = [self.run_adapter(a, module_set) for a in self._adapters]
        else:
            slots: list[AdaptResult | None] = [None] * len(self._adapters)
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                future_to_index = {
                    executor.submit(self.run_adapter, adapter, module_set): index
                    for index, adapter in enumerate(self._adapters)
                }
                for future in as_completed(future_to_index):
                    slots[future_to_index[future]] = future.result()
            results = [r for r in slots if r is not None]

        total_errors = sum(len(r.errors) for r in results)
        total_time = sum(r.duration_seconds for r in results)
        logger.info(
            f"Adaptation complete: {len(results)} adapters, "
            f"{total_errors} errors, {total_time:.2f}s total"
        )

        return results

    def run_by_family(
        self,
        module_set: ModuleSet,
        families: list[str],
        parallel: bool = False,
        max_workers: int = 4,
    ) -> list[AdaptResult]:
        """
        Run only adapters matching the given families.

        Args:
            module_set: Module Set to adapt
            families: Families to run

        Returns:
            List of AdaptResults in adapter order
        """
        filtered = [a for a in self._adapters if a.family in families]
        return AdapterRunner(filtered).run_all(module_set, parallel, max_workers)
