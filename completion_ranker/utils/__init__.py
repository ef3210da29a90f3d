# small helpers shared by the core and the CLI: config, logging, metrics
