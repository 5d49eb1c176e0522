"""Scene graph models, adapter protocol, and YAML scene loading."""
