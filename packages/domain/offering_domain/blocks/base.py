"""Base classes for reporting blocks.

This module provides the foundation for the blocks architecture:
- BlockContext for passing data between blocks
- Block abstract base class
- BlockExecutor for dependency ordering and execution
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


# =============================================================================
# Block Context
# =============================================================================

@dataclass
class BlockContext:
    """Named values shared between blocks.

    Blocks read their inputs from the context and write their outputs back.

    Example:
        context = BlockContext()
        context.set("submissions", store.list_submissions())

        AllocationBlock().execute(context)
        ledger_df = context.get("allocation_ledger")
    """

    _data: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str) -> Any:
        """Get value from context.

        Raises:
            KeyError: If key not found in context
        """
        if key not in self._data:
            raise KeyError(f"Key '{key}' not found in context. Available keys: {list(self._data.keys())}")
        return self._data[key]

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def has(self, key: str) -> bool:
        return key in self._data

    def keys(self) -> List[str]:
        return list(self._data.keys())


# =============================================================================
# Block Base Class
# =============================================================================

class Block(ABC):
    """A reusable computation unit with declared inputs and outputs.

    Subclass example:
        class SubmissionCountBlock(Block):
            def inputs(self) -> List[str]:
                return ["submissions"]

            def outputs(self) -> List[str]:
                return ["submission_count"]

            def execute(self, context: BlockContext) -> None:
                context.set("submission_count", len(context.get("submissions")))
    """

    @abstractmethod
    def inputs(self) -> List[str]:
        """Context keys this block reads."""
        pass

    @abstractmethod
    def outputs(self) -> List[str]:
        """Context keys this block writes."""
        pass

    @abstractmethod
    def execute(self, context: BlockContext) -> None:
        """Read inputs from context, compute, write outputs to context."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(inputs={self.inputs()}, outputs={self.outputs()})"


# =============================================================================
# Block Executor
# =============================================================================

class CircularDependencyError(Exception):
    """Raised when blocks depend on each other's outputs in a cycle."""
    pass


class BlockExecutor:
    """Runs blocks once each, in an order that satisfies their inputs.

    A block is ready once every input it reads is either in the initial
    context or produced by a block that has already been scheduled. Ready
    blocks run in the order they were given.

    Example:
        executor = BlockExecutor([AllocationBlock(), TierScheduleBlock()])
        context = BlockContext()
        context.set("submissions", submissions)
        executor.execute(context)
    """

    def __init__(self, blocks: List[Block]):
        self.blocks = blocks
        self._check_unique_outputs()

    def _check_unique_outputs(self) -> None:
        producers: Dict[str, Block] = {}
        for block in self.blocks:
            for key in block.outputs():
                if key in producers:
                    raise ValueError(f"Multiple blocks produce '{key}': {producers[key]} and {block}")
                producers[key] = block

    def plan(self, available_keys: Optional[List[str]] = None) -> List[Block]:
        """Return blocks in execution order.

        Args:
            available_keys: Keys present in the initial context. Inputs that no
                block produces are assumed to be supplied there when omitted.

        Raises:
            CircularDependencyError: If some blocks can never become ready
        """
        produced = {key for block in self.blocks for key in block.outputs()}
        if available_keys is None:
            available = {key for block in self.blocks for key in block.inputs()} - produced
        else:
            available = set(available_keys)

        pending = list(self.blocks)
        ordered: List[Block] = []
        while pending:
            ready = [block for block in pending if set(block.inputs()) <= available]
            if not ready:
                raise CircularDependencyError(
                    f"Blocks cannot be scheduled (cycle or missing input): {pending}"
                )
            for block in ready:
                ordered.append(block)
                available.update(block.outputs())
                pending.remove(block)
        return ordered

    def execute(self, context: BlockContext) -> BlockContext:
        """Execute all blocks and return the context with their outputs.

        Raises:
            CircularDependencyError: If blocks cannot be ordered
            KeyError: If an input is missing from the context
            ValueError: If a block does not write a declared output
        """
        for block in self.plan():
            for key in block.inputs():
                if not context.has(key):
                    raise KeyError(
                        f"Block {block} requires input '{key}' but it's not in context. "
                        f"Available keys: {context.keys()}"
                    )

            block.execute(context)

            for key in block.outputs():
                if not context.has(key):
                    raise ValueError(f"Block {block} declared output '{key}' but didn't write it to context")
        return context
