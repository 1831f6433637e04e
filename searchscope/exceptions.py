class SearchScopeError(Exception):
    # base exception for all application-specific errors.
    pass

class ConfigError(SearchScopeError):
    # errors related to configuration.
    pass

class PathResolutionError(SearchScopeError):
    # filesystem faults while resolving include patterns to paths.
    pass

class OutputError(SearchScopeError):
    # errors during output operations.
    pass
