class MapperInfrastructureError(Exception):
    pass


class DataSourceError(MapperInfrastructureError):
    pass


class DataSourceNotFoundError(DataSourceError):
    pass


class DataParseError(DataSourceError):
    pass


class DataWriteError(DataSourceError):
    pass


class ExportGenerationError(MapperInfrastructureError):
    pass


class ArtifactDeliveryError(DataWriteError):
    pass
