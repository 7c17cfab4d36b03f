from .frame import frame_columns, records_from_frame, rows_to_frame

__all__ = ["frame_columns", "records_from_frame", "rows_to_frame"]
