class AdamBdsInfrastructureError(Exception):
    pass


class DataSourceError(AdamBdsInfrastructureError):
    pass


class DataSourceNotFoundError(DataSourceError):
    pass


class DataParseError(DataSourceError):
    pass


class DataValidationError(DataSourceError):
    pass


class XportGenerationError(AdamBdsInfrastructureError):
    pass
