class BackendProxy:
    """Forward ``G.nx.<name>(...)`` to the backend with the exported graph prepended.

    The export is taken once per structural version of the graph.
    """

    def __init__(self, graph, backend_name):
        self._graph = graph
        self._backend_name = backend_name

    @property
    def _backend(self):
        from .manager import ensure_materialized

        return ensure_materialized(self._backend_name, self._graph)

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        backend = self._backend
        # Try backend-level function (e.g., networkx.shortest_path)
        fn = getattr(backend["module"], name, None)
        if callable(fn):

            def wrapped(*args, **kwargs):
                return fn(self._backend["graph"], *args, **kwargs)

            return wrapped

        # Otherwise forward attribute to the backend graph itself
        return getattr(backend["graph"], name)
