"""
ContigWeaver Pipeline Orchestrator.

Runs the assembly engine end to end on an in-memory list of reads:

    reads -> DeBruijnGraphBuilder -> GraphSimplifier -> PathResolver -> N50

The phases run strictly in sequence. Progress is reported through the
module logger and, optionally, a ``progress_callback(event, payload)``
invoked at phase boundaries:

- ``build_complete``
- ``simplify_pass_complete`` (once per pass)
- ``source_search_complete`` (once per source node)
- ``assembly_complete``
"""

from pathlib import Path
from typing import Optional, Dict, Any, List, Iterable, Callable, Union
from dataclasses import dataclass, field
import logging
import time

from ..assembly_core.dbg_engine_module import KmerGraphConfig, DeBruijnGraphBuilder
from ..assembly_core.graph_simplifier_module import GraphSimplifier, SimplificationStats
from ..assembly_core.path_resolver_module import PathResolver
from ..assembly_utils.assembly_stats import (
    N50_EMPTY,
    AssemblyStats,
    compute_n50,
    calculate_assembly_stats,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, Dict[str, Any]], None]

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = 'INFO', log_file: Optional[Union[str, Path]] = None):
    """
    Configure root logging for a run.

    Args:
        level: Logging level name
        log_file: Optional file that receives the same records as stderr
    """
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


# ============================================================================
# Data Structures
# ============================================================================

@dataclass
class AssemblyResult:
    """
    Result of an assembly run.

    Attributes:
        contigs: Final contig sequences in output order
        n50: N50 of the contigs, or N50_EMPTY (-1) when there are none
        k: K-mer size used for the graph
        stats: Contiguity statistics
        simplification: Simplifier counters
        timings: Phase name -> wall-clock seconds
    """
    contigs: List[str]
    n50: int
    k: int
    stats: AssemblyStats
    simplification: Optional[SimplificationStats] = None
    timings: Dict[str, float] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.contigs

    def to_dict(self) -> Dict[str, Any]:
        """Serializable summary (contig sequences excluded)."""
        return {
            'k': self.k,
            'n50': self.n50,
            'stats': self.stats.to_dict(),
            'simplification': self.simplification.to_dict() if self.simplification else None,
            'timings': dict(self.timings),
        }


# ============================================================================
# Pipeline
# ============================================================================

class AssemblyPipeline:
    """
    Single-shot assembly of a read set.

    Example:
        >>> pipeline = AssemblyPipeline(k=31)
        >>> result = pipeline.run(reads)
        >>> print(result.n50, len(result.contigs))
    """

    def __init__(
        self,
        k: int,
        progress_callback: Optional[ProgressCallback] = None,
        check_invariants: bool = False
    ):
        # Validates k before any graph work
        self.config = KmerGraphConfig(k=k)
        self.progress_callback = progress_callback
        self.check_invariants = check_invariants

    def _emit(self, event: str, payload: Dict[str, Any]):
        logger.debug(f"{event}: {payload}")
        if self.progress_callback is not None:
            self.progress_callback(event, payload)

    def run(self, reads: Iterable[str]) -> AssemblyResult:
        """
        Assemble reads into contigs.

        Args:
            reads: Plain sequence strings

        Returns:
            AssemblyResult; empty (n50 == -1) when there are no reads
        """
        reads = list(reads)
        k = self.config.k

        if not reads:
            logger.warning("No reads supplied; nothing to assemble")
            result = AssemblyResult(
                contigs=[],
                n50=N50_EMPTY,
                k=k,
                stats=calculate_assembly_stats([]),
            )
            self._emit('assembly_complete', {'contigs': 0, 'n50': N50_EMPTY})
            return result

        timings: Dict[str, float] = {}

        # Phase 1: build
        start = time.time()
        store = DeBruijnGraphBuilder(self.config).build(reads)
        timings['build'] = time.time() - start
        self._emit('build_complete', {'reads': len(reads), **store.summary()})

        # Phase 2: simplify
        start = time.time()
        simplifier = GraphSimplifier(
            store,
            check_invariants=self.check_invariants,
            progress_callback=self.progress_callback
        )
        simplification = simplifier.run()
        timings['simplify'] = time.time() - start

        # Phase 3: resolve
        start = time.time()
        resolver = PathResolver(store, progress_callback=self.progress_callback)
        contigs = [route.sequence for route in resolver.resolve()]
        timings['resolve'] = time.time() - start

        # Phase 4: metrics
        n50 = compute_n50(len(contig) for contig in contigs)
        stats = calculate_assembly_stats(contigs)

        logger.info(
            f"Assembly complete: {len(contigs)} contigs, {stats.total_length:,} bp, N50={n50}"
        )
        self._emit('assembly_complete', {'contigs': len(contigs), 'n50': n50})

        return AssemblyResult(
            contigs=contigs,
            n50=n50,
            k=k,
            stats=stats,
            simplification=simplification,
            timings=timings,
        )


def run_assembly(
    reads: Iterable[str],
    k: int,
    progress_callback: Optional[ProgressCallback] = None,
    check_invariants: bool = False
) -> AssemblyResult:
    """Convenience function: assemble ``reads`` with k-mer size ``k``."""
    pipeline = AssemblyPipeline(
        k,
        progress_callback=progress_callback,
        check_invariants=check_invariants
    )
    return pipeline.run(reads)
