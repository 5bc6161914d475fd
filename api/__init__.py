"""Mock coordinating server for running the node in host mode."""
