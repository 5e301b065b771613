class MinHeap: # array-backed binary min-heap of tree nodes, keyed on node.frequency
    def __init__(self):
        self.heap = [] # parent = (i-1)//2, left = 2i+1, right = 2i+2

    def __len__(self):
        return len(self.heap)

    def __iter__(self): # raw heap-array order, not sorted order
        return iter(self.heap)

    def insert(self, node):
        self.heap.append(node)
        self._sift_up(len(self.heap) - 1)

    def extract_min(self):
        if not self.heap:
            return None # nothing left to extract

        smallest = self.heap[0]
        last = self.heap.pop()
        if self.heap:
            self.heap[0] = last
            self._sift_down(0)
        return smallest

    def _sift_up(self, index):
        while index > 0:
            parent = (index - 1) // 2
            if self.heap[index].frequency < self.heap[parent].frequency:
                self.heap[index], self.heap[parent] = self.heap[parent], self.heap[index]
                index = parent
            else:
                break

    def _sift_down(self, index):
        size = len(self.heap)
        while True:
            small = index
            left = 2 * index + 1
            right = 2 * index + 2

            if left < size and self.heap[left].frequency < self.heap[small].frequency:
                small = left
            if right < size and self.heap[right].frequency < self.heap[small].frequency:
                small = right

            if small == index:
                break
            self.heap[index], self.heap[small] = self.heap[small], self.heap[index]
            index = small
