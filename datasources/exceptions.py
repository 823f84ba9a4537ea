# datasources/exceptions.py

class DataSourceError(Exception):
    pass


class InvalidQuery(DataSourceError):
    pass


class EmptyDataset(DataSourceError):
    pass
