"""
Pneuma - Authenticated-call protocol for the AntChain BaaS REST gateway.

Provides the handshake, call assembly, envelope codec and the pluggable
HTTP executor the façade in ``antchain.client`` is built on.

Uses httpx for transport and rfc8785 for canonical request bodies.
"""
