"""Priority queue holding at most one pending entry per state."""
import itertools


class UpdatablePriorityQueue:
    """
    Binary min-heap with a side index from state key to heap slot.

    Enqueueing a state that is already pending keeps only the smaller of the two
    priorities, so the heap never grows beyond the number of discovered states.
    Equal priorities come out in insertion order.
    """

    def __init__(self, priority_key=None, state_key=None):
        self._priority_key = priority_key or (lambda p: p)
        self._state_key = state_key or (lambda s: s)
        self._heap = []    # [sort_key, seq, state, priority]
        self._index = {}   # {state_key: heap slot}
        self._counter = itertools.count()

    def __len__(self):
        return len(self._heap)

    def __bool__(self):
        return bool(self._heap)

    def __contains__(self, state):
        return self._state_key(state) in self._index

    def enqueue_minimum(self, state, priority):
        """Insert state, or lower its priority if it is pending with a larger one.

        Returns True if the queue changed.
        """
        key = self._state_key(state)
        sort_key = self._priority_key(priority)
        slot = self._index.get(key)
        if slot is None:
            self._heap.append([sort_key, next(self._counter), state, priority])
            self._index[key] = len(self._heap) - 1
            self._sift_up(len(self._heap) - 1)
            return True

        entry = self._heap[slot]
        if not sort_key < entry[0]:
            return False
        entry[0] = sort_key
        entry[1] = next(self._counter)
        entry[2] = state
        entry[3] = priority
        self._sift_up(slot)
        return True

    def peek(self):
        if not self._heap:
            return None
        _, _, state, priority = self._heap[0]
        return state, priority

    def try_dequeue(self):
        """Remove and return the (state, priority) pair with the smallest priority, or None."""
        if not self._heap:
            return None
        last = self._heap.pop()
        if self._heap:
            top = self._heap[0]
            self._heap[0] = last
            self._index[self._state_key(last[2])] = 0
            self._sift_down(0)
        else:
            top = last
        del self._index[self._state_key(top[2])]
        return top[2], top[3]

    def _less(self, i, j):
        a, b = self._heap[i], self._heap[j]
        if a[0] < b[0]:
            return True
        if b[0] < a[0]:
            return False
        return a[1] < b[1]

    def _swap(self, i, j):
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        self._index[self._state_key(heap[i][2])] = i
        self._index[self._state_key(heap[j][2])] = j

    def _sift_up(self, pos):
        while pos > 0:
            parent = (pos - 1) >> 1
            if not self._less(pos, parent):
                break
            self._swap(pos, parent)
            pos = parent

    def _sift_down(self, pos):
        size = len(self._heap)
        while True:
            child = 2 * pos + 1
            if child >= size:
                break
            if child + 1 < size and self._less(child + 1, child):
                child += 1
            if not self._less(child, pos):
                break
            self._swap(pos, child)
            pos = child
