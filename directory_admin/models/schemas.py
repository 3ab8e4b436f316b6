"""Pydantic schemas for the directory backend responses."""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BackendModel(BaseModel):
    """Base model accepting both the backend's camelCase keys and field names."""

    model_config = ConfigDict(populate_by_name=True)


class ErrorBody(BackendModel):
    """Error body returned with non-success status codes."""

    error: Optional[str] = Field(None, description="Human-readable error message")


class UploadHistoryEntry(BackendModel):
    """One past bulk-upload operation."""

    id: Optional[str] = Field(None, alias="_id", description="Upload record identifier")
    original_name: str = Field(..., alias="originalName", description="Original file name")
    upload_date: Union[datetime, str] = Field(
        ..., alias="uploadDate", union_mode="left_to_right", description="Upload timestamp"
    )
    file_type: str = Field("", alias="fileType", description="File type (xlsx, csv, ...)")
    file_size: int = Field(0, alias="fileSize", description="File size in bytes")
    status: str = Field("", description="completed, partial or failed")
    successful_uploads: int = Field(0, alias="successfulUploads", description="Rows stored")
    total_rows: int = Field(0, alias="totalRows", description="Rows found in the file")

    @field_validator("file_size", "successful_uploads", "total_rows", mode="before")
    @classmethod
    def null_count_as_zero(cls, v):
        return 0 if v is None else v

    @field_validator("file_type", "status", mode="before")
    @classmethod
    def null_text_as_empty(cls, v):
        return "" if v is None else v


class RowError(BackendModel):
    """A single row rejected during bulk upload."""

    row: Union[int, str] = Field(..., description="Row number in the source sheet")
    sheet: Optional[str] = Field(None, description="Sheet name for multi-sheet workbooks")
    error: str = Field(..., description="Why the row was rejected")


class BulkUploadResponse(BackendModel):
    """Response model for the bulk upload endpoint."""

    uploaded_count: int = Field(..., alias="uploadedCount", description="Listings created")
    errors: List[RowError] = Field(default_factory=list, description="Rejected rows")


class SheetInfo(BackendModel):
    """Row count for one sheet of a workbook."""

    name: str = Field(..., description="Sheet name")
    rows: int = Field(..., description="Data rows in the sheet")


class DryRunResponse(BackendModel):
    """Response model for the dry-run parse endpoint."""

    file_name: str = Field(..., alias="fileName", description="Original file name")
    file_extension: str = Field(..., alias="fileExtension", description="Detected format")
    total_rows: int = Field(..., alias="totalRows", description="Rows across all sheets")
    sheets: Optional[List[SheetInfo]] = Field(None, description="Per-sheet row counts")
    auto_categorization: Optional[Dict[str, str]] = Field(
        None, alias="autoCategorization", description="Sheet/tab name to inferred industry"
    )
    headers: List[str] = Field(default_factory=list, description="Detected header cells")
    first_row: Any = Field(None, alias="firstRow", description="First data row as parsed")


class DeleteAllResponse(BackendModel):
    """Response model for the clear-all endpoint."""

    deleted_count: int = Field(..., alias="deletedCount", description="Listings deleted")
