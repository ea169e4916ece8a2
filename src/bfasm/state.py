from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class GeneratorState:
    lines: List[str] = field(default_factory=list)
    jump_counter: int = 0
    label_stack: List[int] = field(default_factory=list)
    trace: List[str] = field(default_factory=list)
    is_tracing: bool = False

    def reset(self) -> None:
        self.lines.clear()
        self.jump_counter = 0
        self.label_stack.clear()
        self.trace.clear()

    def emit(self, line: str) -> None:
        self.lines.append(line)

    def open_loop(self) -> int:
        label = self.jump_counter
        self.label_stack.append(label)
        self.jump_counter += 1
        return label

    def add_trace(self, message: str) -> None:
        if self.is_tracing:
            self.trace.append(message)
