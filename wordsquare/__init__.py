from wordsquare.solver import (
    DictionaryLengthMismatch,
    InvalidGridSize,
    is_word_square,
    next_coord,
    solve,
    traversal_order,
)
from wordsquare.trie import END_OF_WORD, InvalidWord, PrefixDictionary, load_dictionary
