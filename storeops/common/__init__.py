# Common utilities
from .archive import ArchiveEntry, ZipArchiveReader
from .config_loader import (
    load_config,
    load_extractor_settings,
    load_importer_settings,
    load_server_settings,
    load_tagging_settings,
)
from .csv_utils import CsvCodec, configure_csv, read_csv, write_csv
from .exceptions import (
    DecodeFailureError,
    InputMissingError,
    StoreOpsError,
    UpstreamFailureError,
)
from .log_config import setup_logging
from .text_utils import normalize_shop_domain, normalize_store_url
