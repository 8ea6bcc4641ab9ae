from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Iterable, Set, Union

from fuzztrie.automaton import Automaton

V = TypeVar('V')

_no_default = object()


class Index(ABC, Generic[V]):
    """
    A mapping of string keys to sets of values, with exact and prefix retrieval
    """

    @abstractmethod
    def clear(self):
        pass

    @abstractmethod
    def get_all(self, key: str) -> Set[V]:
        """
        :return: the values associated with exactly key
        """
        pass

    @abstractmethod
    def get_any(self, fragment: str) -> Set[V]:
        """
        :return: the values associated with any key that starts with fragment
        """
        pass

    @abstractmethod
    def is_empty(self) -> bool:
        pass

    @abstractmethod
    def put_all(self, key: str, values: Iterable[V]) -> bool:
        """
        :return: whether any value was added
        """
        pass

    @abstractmethod
    def remove_all(self, key_or_values, values=_no_default):
        """
        remove values from a single key, or from every key in the index
        """
        pass

    @abstractmethod
    def size(self) -> int:
        pass

    def put(self, key: str, *values: V) -> bool:
        return self.put_all(key, values)

    def remove(self, key: str, *values: V) -> bool:
        return self.remove_all(key, values)

    def __contains__(self, key):
        return bool(self.get_all(key))

    def __len__(self):
        return self.size()

    def __bool__(self):
        return not self.is_empty()


class FuzzyIndex(Index[V]):
    """
    An index that can also retrieve the values of every key accepted by a matching automaton
    """

    @abstractmethod
    def get_any(self, query: Union[str, Automaton]) -> Set[V]:
        """
        :param query: either a prefix fragment, or the initial state of an automaton
        :return: the values associated with any key that starts with the fragment, or that the automaton accepts
        """
        pass
