import numpy as np


class CacheManager:
    """Cache manager for materialized matrices (CSR/CSC) and degree vectors."""

    def __init__(self, graph):
        self._G = graph
        self._csr = None
        self._csc = None
        self._degrees = None
        self._csr_version = None
        self._csc_version = None
        self._degrees_version = None

    # ==================== CSR/CSC Properties ====================

    @property
    def csr(self):
        """Get the unweighted adjacency in CSR (Compressed Sparse Row) format.
        Builds and caches on first access.
        """
        if self._csr is None or self._csr_version != self._G._state.version:
            self._csr = self._G.adjacency_matrix()
            self._csr_version = self._G._state.version
        return self._csr

    @property
    def csc(self):
        """Get the unweighted adjacency in CSC (Compressed Sparse Column) format.
        Column slices give in-adjacency of directed graphs.
        """
        if self._csc is None or self._csc_version != self._G._state.version:
            self._csc = self.csr.tocsc()
            self._csc_version = self._G._state.version
        return self._csc

    @property
    def degrees(self):
        """Get ``(out_degree, in_degree)`` numpy vectors indexed by vertex.
        Both vectors are equal for undirected graphs (self-loops count twice).
        """
        if self._degrees is None or self._degrees_version != self._G._state.version:
            n = self._G.vertex_bound()
            out_deg = np.zeros(n, dtype=np.int64)
            in_deg = np.zeros(n, dtype=np.int64)
            for e in self._G.edges():
                out_deg[e.source] += 1
                in_deg[e.target] += 1
            if not self._G.is_directed():
                out_deg = in_deg = out_deg + in_deg
            self._degrees = (out_deg, in_deg)
            self._degrees_version = self._G._state.version
        return self._degrees

    def has_csr(self) -> bool:
        """True if CSR cache exists and matches current graph version."""
        return self._csr is not None and self._csr_version == self._G._state.version

    def has_csc(self) -> bool:
        """True if CSC cache exists and matches current graph version."""
        return self._csc is not None and self._csc_version == self._G._state.version

    # ==================== Cache Management ====================

    def invalidate(self, formats=None):
        """Invalidate cached formats.

        Parameters
        ----------
        formats : list[str], optional
            Formats to invalidate ('csr', 'csc', 'degrees').
            If None, invalidate all.

        """
        if formats is None:
            formats = ["csr", "csc", "degrees"]

        for fmt in formats:
            if fmt == "csr":
                self._csr = None
                self._csr_version = None
            elif fmt == "csc":
                self._csc = None
                self._csc_version = None
            elif fmt == "degrees":
                self._degrees = None
                self._degrees_version = None

    def build(self, formats=None):
        """Pre-build specified formats (eager caching)."""
        if formats is None:
            formats = ["csr", "csc", "degrees"]

        for fmt in formats:
            if fmt == "csr":
                _ = self.csr
            elif fmt == "csc":
                _ = self.csc
            elif fmt == "degrees":
                _ = self.degrees

    def info(self):
        """Get cache status.

        Returns
        -------
        dict
            Status of each cached format

        """

        def _format_info(matrix, version):
            if matrix is None:
                return {"cached": False}
            return {
                "cached": True,
                "version": version,
                "nnz": matrix.nnz,
                "shape": matrix.shape,
            }

        return {
            "csr": _format_info(self._csr, self._csr_version),
            "csc": _format_info(self._csc, self._csc_version),
            "degrees": {"cached": self._degrees is not None, "version": self._degrees_version},
        }
