"""hydrapin core: external tools, Hydra client, resolver, overlay store, commands."""
