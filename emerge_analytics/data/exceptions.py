"""
Exceptions raised by the data access layer.
"""


class DataAccessError(RuntimeError):
    """
    A read from the storage collaborator failed.

    Fatal for the analysis call that triggered it: no partial report is
    produced and the error propagates unchanged to the caller.
    """

    def __init__(self, collection: str, message: str):
        self.collection = collection
        super().__init__(f"Failed to read collection '{collection}': {message}")
