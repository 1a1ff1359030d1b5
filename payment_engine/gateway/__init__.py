"""payment_engine.gateway — record decoding and snapshot encoding."""

from payment_engine.gateway.csv_io import iter_file as iter_file
from payment_engine.gateway.csv_io import read_records as read_records
from payment_engine.gateway.csv_io import write_records as write_records
from payment_engine.gateway.csv_io import write_snapshots as write_snapshots
from payment_engine.gateway.parser import parse_record as parse_record
from payment_engine.gateway.types import TransactionRecord as TransactionRecord
