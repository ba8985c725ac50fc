"""Guide MCP - markdown developer guide search exposed over MCP."""

__version__ = "0.1.0"
