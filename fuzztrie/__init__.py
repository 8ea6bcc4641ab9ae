from fuzztrie.automaton import Automaton
from fuzztrie.exceptions import MissingArgumentError
from fuzztrie.index import Index, FuzzyIndex
from fuzztrie.trie import TrieIndex, TrieNode, SortedTrieIndex
from fuzztrie._version import __version__

__author__ = 'fuzztrie contributors'

__all__ = ['Automaton', 'MissingArgumentError', 'Index', 'FuzzyIndex', 'TrieIndex', 'TrieNode', 'SortedTrieIndex',
           '__version__']
