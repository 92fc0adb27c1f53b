"""SPARXSTAR Gluon.

This package contains the Gluon host integration: a consent-aware session
token issuer and a capability ("ability") registry that advertises callable
operations, with their input and output schemas, to external callers such as
AI agents.

High-level architecture
-----------------------

The codebase is organized around two cooperating halves that both react to
host lifecycle hooks:

- **Consent and session**: ``ConsentGate`` answers whether the visitor granted
  a consent category, and ``SessionIssuer`` hands out a single ``__Host-``
  session cookie per client when consent allows it.
- **Capabilities**: ``CapabilityRegistry`` maps ``<namespace>/<action>`` names to
  descriptors grouped by category, and ``CapabilityExecutor`` runs them behind a
  permission check and a structural schema validation.

Core subpackages
----------------

- ``sparxstar_gluon.core``: logging, monitoring, hook dispatch, settings store
  and environment probing.
- ``sparxstar_gluon.consent`` / ``sparxstar_gluon.session``: consent gate and
  cookie issuance.
- ``sparxstar_gluon.capabilities``: descriptors, schemas, registry, executor.
- ``sparxstar_gluon.abilities``: the AI manager and the abilities it ships.
- ``sparxstar_gluon.server``: the FastAPI adapter exposing discovery and
  invocation over HTTP.

Typical workflow
----------------

Most integrations should use ``sparxstar_gluon.plugin.GluonPlugin``:

1. Probe the environment and build the plugin.
2. ``boot()`` it once at startup; this populates the registries and closes the
   registration window.
3. Fire the ``init`` hook per request so the session issuer can run.
4. Route external calls through ``plugin.executor.invoke(...)``.
"""
