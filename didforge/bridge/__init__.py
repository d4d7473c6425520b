"""Bridge layer between didforge and the DID-anchoring service.

Modules
-------
did_client
    The ``DIDClient`` protocol the pipeline depends on, and
    ``SidetreeClient``, its ``httpx``-based Sidetree implementation.
"""
