class TSNConfigurationError(Exception):
    """Base exception for TSN configuration errors."""
    pass

class InvalidTopologyError(TSNConfigurationError):
    """Exception raised for invalid topology configurations."""
    pass

class NodeNotFoundError(InvalidTopologyError):
    """Exception raised when a specified node is not found."""
    def __init__(self, node_name: str, message="Node not found"):
        self.node_name = node_name
        super().__init__(f"{message}: {node_name}")

class InvalidRoutingError(TSNConfigurationError):
    """Exception raised when a VLAN routing does not match its application."""
    def __init__(self, title: str, message="Invalid routing"):
        self.title = title
        super().__init__(f"{message}: {title}")

class UnsupportedApplicationError(TSNConfigurationError):
    """Exception raised when an evaluator meets an application kind it cannot handle."""
    def __init__(self, kind, title: str, message="Unsupported application kind"):
        self.kind = kind
        self.title = title
        super().__init__(f"{message} '{kind}' of {title}")

class ConfigurationError(TSNConfigurationError):
    """Exception raised for malformed configuration or network files."""
    pass

class SolverError(TSNConfigurationError):
    """Exception raised for solver misuse."""
    pass
