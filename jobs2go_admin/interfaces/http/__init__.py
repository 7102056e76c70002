"""HTTP interface: dependencies, routers and error handling."""
