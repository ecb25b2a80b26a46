# Services package: dataset cache, refresh scheduling, queries and wiring.
