"""Selection engine: data model, state machine, cell resolver, presets and month layout."""
