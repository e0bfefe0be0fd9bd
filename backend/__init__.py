"""
Family Timeline Backend

This package implements the data side of the weekly event timeline with
hard boundaries between responsibilities. Each layer communicates only
through explicit contracts, never through shared mutable state.

LAYER STRUCTURE:
================

1. INGESTION LAYER (ingestion/)
   - Responsibility: Raw event capture from calendar collaborators
   - Allowed inputs: Google Calendar API, JSON files, in-memory records
   - Outputs: Raw record dicts
   - MUST NOT: Clean titles, parse timestamps, or filter by window

2. NORMALIZATION LAYER (normalization/)
   - Responsibility: Records -> Events (title cleaning, timestamp parsing)
   - Allowed inputs: Raw records from the ingestion layer
   - Outputs: Event (immutable), NormalizationReport
   - MUST NOT: Order, position, or select events

3. TEMPORAL LAYER (temporal/)
   - Responsibility: Injectable clock, week-window arithmetic
   - Outputs: WeekWindow
   - MUST NOT: Read system time except in live clock mode

4. CORE LAYOUT ENGINE (core/)
   - Responsibility: Ordering, next-event resolution, axis positions,
     overflow aggregation, relative labels
   - Allowed inputs: Events + WeekWindow + explicit "now"
   - MUST NOT: Hold state between calls

5. OBSERVABILITY LAYER (observability/)
   - Responsibility: Logging setup
   - MUST NOT: Modify system behavior

6. API (api/)
   - Responsibility: Serve computed views over HTTP
   - MUST NOT: Compute layout itself

CONSTRAINTS ENFORCED:
=====================
- Immutability-first: All data structures are frozen/immutable
- Deterministic: Same events + same state + same now = identical view
- Explicit errors: Dropped records and failed fetches are reported, not hidden
- Local calendar days: Windows and relative labels never use 24h deltas
"""
