"""Application services: setup orchestration and runner I/O."""
