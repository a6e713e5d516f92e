class MapperError(Exception):
    pass


class NotFoundError(MapperError):
    pass


class MappingNotFoundError(NotFoundError):
    def __init__(self, mapping_id: str) -> None:
        super().__init__(f"Mapping not found: {mapping_id}")
        self.mapping_id = mapping_id


class DatasetNotFoundError(NotFoundError):
    def __init__(self, dataset_id: str) -> None:
        super().__init__(f"Dataset not found: {dataset_id}")
        self.dataset_id = dataset_id


class MalformedSourceRecordError(MapperError):
    """A source record lacks identity data or carries values that cannot be normalized."""

    def __init__(self, message: str, *, record_kind: str = "record") -> None:
        super().__init__(f"Malformed {record_kind}: {message}")
        self.record_kind = record_kind
