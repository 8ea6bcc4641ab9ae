from __future__ import annotations

from abc import ABC, abstractmethod


class Automaton(ABC):
    """
    A state of a matching automaton, walked alongside the trie during fuzzy lookup.

    States are immutable, step() returns a new state and leaves the old one untouched.
    Any object that defines all three methods is considered an Automaton, inheritance is not required.
    """
    __slots__ = ()

    @abstractmethod
    def is_accepted(self) -> bool:
        """
        :return: whether every continuation from this state is a match. When True, the whole remaining subtree
         is admitted without further stepping.
        """
        pass

    @abstractmethod
    def is_rejected(self) -> bool:
        """
        :return: whether no continuation from this state can be a match. Once a state is rejected, every state
         stepped from it must be rejected as well.
        """
        pass

    @abstractmethod
    def step(self, char: str) -> Automaton:
        """
        :return: the state after consuming one more character of the candidate key
        """
        pass

    @classmethod
    def __subclasshook__(cls, C):
        if cls is Automaton:
            required = ('is_accepted', 'is_rejected', 'step')
            if all(any(name in B.__dict__ and B.__dict__[name] is not None for B in C.__mro__) for name in required):
                return True
        return NotImplemented
