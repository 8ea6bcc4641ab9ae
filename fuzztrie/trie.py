from __future__ import annotations

import logging
from typing import TypeVar, Generic, Iterable, Iterator, Mapping, MutableMapping, Callable, List, Tuple, Set, FrozenSet, \
    Optional, Union

from sortedcontainers import SortedDict

from fuzztrie.automaton import Automaton
from fuzztrie.exceptions import MissingArgumentError
from fuzztrie.index import FuzzyIndex, _no_default

V = TypeVar('V')

log = logging.getLogger("fuzztrie")


def _require(name, value):
    if value is None:
        raise MissingArgumentError(name)


def _require_key(name, key):
    _require(name, key)
    if not isinstance(key, str):
        raise TypeError(f'{name!r} must be a str, got {type(key).__name__}')


class TrieNode(Generic[V]):
    """
    A node for a trie, holding the values of the exact key spelled by the path to it
    """
    __slots__ = 'children', 'values'
    # different node types may have different orderings for their children
    children_factory: Callable[[], MutableMapping[str, TrieNode[V]]] = dict

    def __init__(self):
        self.children: MutableMapping[str, TrieNode[V]] = self.children_factory()
        self.values: Set[V] = set()

    def is_empty(self):
        """
        :return: whether the node has neither values nor children
        """
        return not self.children and not self.values

    def flatten(self, buffer: Set[V]) -> Set[V]:
        """
        add the values of this node and of all its descendants to buffer

        :return: buffer
        """
        stack = [self]
        while stack:
            node = stack.pop()
            buffer.update(node.values)
            stack.extend(node.children.values())
        return buffer


class TrieIndex(FuzzyIndex[V]):
    """
    A trie mapping string keys to sets of values, with exact, prefix and automaton lookups.

    Not synchronized, callers must not mutate it concurrently with any other operation.
    """
    # different trie types may have different node types
    node_factory: Callable[[], TrieNode[V]] = TrieNode

    def __init__(self,
                 update_arg: Optional[Union[Mapping[str, Iterable[V]], Iterable[Tuple[str, Iterable[V]]]]] = None):
        self.root: TrieNode[V] = self.node_factory()
        self._len = 0
        if update_arg:
            self.update(update_arg)

    def _ensure_child(self, node: TrieNode[V], edge: str) -> TrieNode[V]:
        """
        make sure a node has a child of the edge, and return it
        """
        ret = node.children.get(edge)
        if ret is None:
            ret = node.children[edge] = self.node_factory()
        return ret

    def _find(self, key: str) -> Optional[TrieNode[V]]:
        current = self.root
        for k in key:
            current = current.children.get(k)
            if current is None:
                return None
        return current

    def _path(self, key: str) -> Optional[List[Tuple[Optional[str], TrieNode[V]]]]:
        """
        :return: the (edge, node) pairs along key, starting with the root, or None if the key has no node
        """
        stack = [(None, self.root)]
        for k in key:
            current = stack[-1][-1].children.get(k)
            if current is None:
                return None
            stack.append((k, current))
        return stack

    @staticmethod
    def _prune(stack: List[Tuple[Optional[str], TrieNode[V]]]):
        """
        unlink every empty node at the bottom of the path, the root is never unlinked
        """
        for i in range(len(stack) - 1, 0, -1):
            edge, node = stack[i]
            if not node.is_empty():
                break
            del stack[i - 1][-1].children[edge]

    def clear(self):
        log.debug("clearing index of %d values", self._len)
        self.root = self.node_factory()
        self._len = 0

    def is_empty(self) -> bool:
        return self.root.is_empty()

    def size(self) -> int:
        return self._len

    def put_all(self, key: str, values: Iterable[V]) -> bool:
        _require_key('key', key)
        _require('values', values)
        values = set(values)
        if not values:
            # a path without values would leave empty nodes behind
            return False
        current = self.root
        for k in key:
            current = self._ensure_child(current, k)
        before = len(current.values)
        current.values.update(values)
        added = len(current.values) - before
        self._len += added
        return added > 0

    def update(self, arg: Union[Mapping[str, Iterable[V]], Iterable[Tuple[str, Iterable[V]]]]) -> bool:
        """
        put all the values of every key in arg

        :return: whether any value was added
        """
        _require('arg', arg)
        if isinstance(arg, Mapping):
            arg = arg.items()
        ret = False
        for key, values in arg:
            if self.put_all(key, values):
                ret = True
        return ret

    def get_all(self, key: str) -> Set[V]:
        _require_key('key', key)
        node = self._find(key)
        if node is None:
            return set()
        return set(node.values)

    def get_any(self, query: Union[str, Automaton]) -> Set[V]:
        _require('query', query)
        if isinstance(query, Automaton):
            return self._match(query)
        if isinstance(query, str):
            node = self._find(query)
            if node is None:
                return set()
            return node.flatten(set())
        raise TypeError(f'expected a fragment or an automaton, got {type(query).__name__}')

    def _match(self, matcher: Automaton) -> Set[V]:
        ret = set()
        stack = [(self.root, matcher)]
        while stack:
            node, state = stack.pop()
            if state.is_accepted():
                # every key below this node is a match
                node.flatten(ret)
            elif not state.is_rejected():
                for edge, child in node.children.items():
                    stack.append((child, state.step(edge)))
        return ret

    def remove_all(self, key_or_values, values=_no_default):
        """
        remove values from the index, depending on the arguments:

        * remove_all(key) clears key and returns the set of values it had
        * remove_all(key, values) removes values from key and returns whether any were removed
        * remove_all(values) removes values from every key and returns whether any were removed
        """
        if values is not _no_default:
            _require_key('key', key_or_values)
            _require('values', values)
            return self._remove_from_key(key_or_values, values)
        if isinstance(key_or_values, str):
            return self._remove_key(key_or_values)
        _require('values', key_or_values)
        return self._remove_everywhere(key_or_values)

    def _remove_key(self, key: str) -> Set[V]:
        stack = self._path(key)
        if stack is None:
            return set()
        node = stack[-1][-1]
        ret = node.values
        node.values = set()
        self._len -= len(ret)
        self._prune(stack)
        return ret

    def _remove_from_key(self, key: str, values: Iterable[V]) -> bool:
        values = set(values)
        stack = self._path(key)
        if stack is None:
            return False
        node = stack[-1][-1]
        before = len(node.values)
        node.values.difference_update(values)
        removed = before - len(node.values)
        self._len -= removed
        self._prune(stack)
        return removed > 0

    def _remove_everywhere(self, values: Iterable[V]) -> bool:
        values = set(values)
        if not values:
            return False
        removed = 0
        pruned = 0
        # post-order, a node is only checked for emptiness after all its children were
        stack = [(None, None, self.root, False)]
        while stack:
            parent, edge, node, expanded = stack.pop()
            if not expanded:
                stack.append((parent, edge, node, True))
                for child_edge, child in node.children.items():
                    stack.append((node, child_edge, child, False))
                continue
            before = len(node.values)
            node.values.difference_update(values)
            removed += before - len(node.values)
            if parent is not None and node.is_empty():
                del parent.children[edge]
                pruned += 1
        self._len -= removed
        if removed:
            log.debug("removed %d values from the index, pruning %d nodes", removed, pruned)
        return removed > 0

    def _items(self, fragment: str, node: TrieNode[V]) -> Iterator[Tuple[str, FrozenSet[V]]]:
        stack = [(fragment, node)]
        while stack:
            key, current = stack.pop()
            if current.values:
                yield key, frozenset(current.values)
            for edge, child in reversed(current.children.items()):
                stack.append((key + edge, child))

    def items(self, fragment: str = '') -> Iterator[Tuple[str, FrozenSet[V]]]:
        """
        :return: an iterator of every key that starts with fragment and has values, along with its values.
         Keys are ordered by the order of their nodes' children.
        """
        _require_key('fragment', fragment)
        node = self._find(fragment)
        if node is None:
            return iter(())
        return self._items(fragment, node)

    def keys(self, fragment: str = '') -> Iterator[str]:
        return (k for (k, _) in self.items(fragment))

    def __iter__(self):
        return self.keys()

    def __repr__(self):
        return f'{type(self).__name__}({ {k: set(v) for (k, v) in self.items()} })'


class SortedTrieNode(TrieNode[V]):
    __slots__ = ()
    children_factory = SortedDict


class SortedTrieIndex(TrieIndex[V]):
    """
    A trie index that iterates its keys in lexicographic order
    """
    node_factory = SortedTrieNode
