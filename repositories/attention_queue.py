"""
repositories/attention_queue.py
-------------------------------
First-come-first-served queue of animals waiting for a vaccination.
"""

from collections import deque
from typing import Optional

from models.animal import Animal


class AttentionQueue:
    """
    Unbounded FIFO queue of Animal references.

    The queue itself accepts duplicates; ``AnimalRepository.enqueue_for_appointment``
    checks ``contains`` first. Empty-queue operations return None instead of raising.
    """

    def __init__(self):
        self._animals: deque[Animal] = deque()

    def enqueue(self, animal: Animal) -> bool:
        self._animals.append(animal)
        return True

    def dequeue(self) -> Optional[Animal]:
        """Remove and return the head, or None if the queue is empty."""
        return self._animals.popleft() if self._animals else None

    def peek(self) -> Optional[Animal]:
        return self._animals[0] if self._animals else None

    def size(self) -> int:
        return len(self._animals)

    def is_empty(self) -> bool:
        return not self._animals

    def contains(self, animal: Animal) -> bool:
        """Membership by entity identity (animal id)."""
        return animal in self._animals

    def __len__(self) -> int:
        return len(self._animals)
