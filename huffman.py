from priority_queue import MinHeap


class HuffmanError(ValueError): # base class for everything the tree rejects
    pass

class EmptyTreeError(HuffmanError):
    pass

class DegenerateTreeError(HuffmanError):
    pass

class InvalidSymbolError(HuffmanError):
    pass

class InvalidFrequencyError(HuffmanError):
    pass

class InvalidBitError(HuffmanError):
    pass

class TreeAlreadyBuiltError(HuffmanError):
    pass

class UnknownSymbolError(HuffmanError):
    pass


class HuffmanNode: # common base for both node kinds
    def __init__(self, frequency):
        self.frequency = frequency

class Leaf(HuffmanNode): # one alphabet symbol, no children
    def __init__(self, symbol, frequency):
        super().__init__(frequency)
        self.symbol = symbol

    def __repr__(self):
        return f"Leaf({self.symbol!r}, {self.frequency})"

class Internal(HuffmanNode): # merge point, owns exactly two children
    def __init__(self, left, right):
        super().__init__(left.frequency + right.frequency)
        self.left = left
        self.right = right

    def __repr__(self):
        return f"Internal({self.frequency}, {self.left!r}, {self.right!r})"


def leaves(root): # yields leaf nodes left to right
    stack = [root] if root is not None else []
    while stack:
        node = stack.pop()
        if isinstance(node, Leaf):
            yield node
        else:
            stack.append(node.right)
            stack.append(node.left)

def generate_huffman_codes(root): # root: root of the Huffman tree
    codes = {}
    stack = [(root, '')] if root is not None else [] # explicit stack, skewed trees outgrow the recursion limit
    while stack:
        node, current_code = stack.pop()

        # Leaf node -> assign code
        if isinstance(node, Leaf):
            codes[node.symbol] = current_code
            continue

        stack.append((node.right, current_code + '1'))
        stack.append((node.left, current_code + '0'))
    return codes # return the mapping of symbols to their corresponding Huffman codes


class HuffmanTree:
    """
    One tree-building session: insert frequencies, build once, then decode
    as many bit sequences as needed against the same tree.

    Equal frequencies are ordered only by how the heap happens to shuffle them,
    so which of two tied symbols gets which code depends on insertion history.
    The codes stay prefix-free and of optimal total length either way.
    """

    def __init__(self):
        self.queue = MinHeap()
        self.root = None
        self.is_built = False
        self._symbols = set()

    def insert_frequency(self, symbol: str, frequency: int) -> None:
        if self.is_built:
            raise TreeAlreadyBuiltError("cannot insert after the tree has been built")
        if not isinstance(symbol, str) or len(symbol) != 1:
            raise InvalidSymbolError(f"symbol must be a single character, got {symbol!r}")
        if symbol in self._symbols:
            raise InvalidSymbolError(f"symbol {symbol!r} was already inserted")
        if isinstance(frequency, bool) or not isinstance(frequency, int):
            raise InvalidFrequencyError(f"frequency must be an integer, got {frequency!r}")
        if frequency < 0:
            raise InvalidFrequencyError(f"frequency must be non-negative, got {frequency}")

        self._symbols.add(symbol)
        self.queue.insert(Leaf(symbol, frequency))

    def build(self) -> None:
        while len(self.queue) > 1:
            left = self.queue.extract_min()
            right = self.queue.extract_min()
            self.queue.insert(Internal(left, right))

        # the root stays in the queue as its only entry
        if len(self.queue) == 1:
            self.root = next(iter(self.queue))
        self.is_built = True

    def _require_branching_root(self):
        if self.root is None:
            raise EmptyTreeError("decode on empty tree")
        if isinstance(self.root, Leaf):
            raise DegenerateTreeError(
                "cannot decode bits against a single-symbol tree with no internal structure")

    def decode(self, bits) -> list:
        self._require_branching_root()
        bits = list(bits)
        for bit in bits:
            if bit not in (0, 1): # True/False compare equal to 1/0
                raise InvalidBitError(f"bit must be 0 or 1, got {bit!r}")

        decoded = []
        current = self.root
        for bit in bits:
            current = current.right if bit else current.left
            if isinstance(current, Leaf): # reached a leaf
                decoded.append(current.symbol)
                current = self.root
        # a partial path left over at the end is dropped
        return decoded

    def codes(self) -> dict:
        return generate_huffman_codes(self.root)

    def encode(self, symbols) -> list:
        self._require_branching_root()
        code_map = self.codes()
        bits = []
        for symbol in symbols:
            code = code_map.get(symbol)
            if code is None:
                raise UnknownSymbolError(f"symbol {symbol!r} is not in the tree")
            bits.extend(ch == '1' for ch in code)
        return bits

    def format_heap(self) -> str:
        if not len(self.queue):
            return "Heap is empty."

        entries = []
        for node in self.queue:
            label = node.symbol if isinstance(node, Leaf) else "internal"
            entries.append(f"({label}:{node.frequency})")
        return " ".join(entries)


def build_from_frequencies(frequency_table) -> HuffmanTree: # frequency_table: dict of symbol -> frequency
    tree = HuffmanTree()
    for symbol, frequency in frequency_table.items():
        tree.insert_frequency(symbol, frequency)
    tree.build()
    return tree
