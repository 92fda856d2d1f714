"""HTTP API: schemas, dependency wiring and routers."""
