class HierarchyError(Exception):
    """Base exception for all taskforest errors."""
    pass

class RecoverableError(HierarchyError):
    """An error the caller can correct and retry without losing data."""
    pass

class FatalError(HierarchyError):
    """An error that requires the caller to stop and intervene."""
    pass

class CorruptionError(FatalError):
    """Corrupted Data Error - from syntax errors in snapshot files, to task records that fail validation"""
    pass

class FileOperationError(RecoverableError):
    """Reading a snapshot file failed but can be retried."""
    pass

class InvalidParentError(RecoverableError):
    """ The proposed parent would make a task its own ancestor """
    pass

class NestingLimitError(RecoverableError):
    """ The proposed parent would push a subtree past the configured depth limit """
    pass
