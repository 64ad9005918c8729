# Path: report_mailer/definition/models.py
"""
Report Definition Models

Pydantic models for the YAML report definition:

    title: Sales
    source: {kind: Sqlite, conn: sales.db}
    send:
      stdout: true
      format: Html
      mail: {host: smtp.example.com, port: 587, from: a@x, to: b@y, user: a, pass: s}
    querys:
      - title: Per product
        sql: SELECT name, qt FROM sales
        fields:
          - {field: name, title: Product, kind: String}
          - {field: qt, title: Quantity, kind: Integer}
        chart: {kind: Bar, keys_by: name, series: [qt]}

Validation rejects duplicate field names, charts that reference
undeclared fields, and charts without exactly one of series/series_by.
The validated definition converts to the immutable pipeline models.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..constants import OutputFormat
from ..process.models import ChartKind, ChartSpec, FieldSpec, QuerySpec, SeriesBy
from ..process.values import FieldKind
from ..send.models import DEFAULT_SENDER_NAME, MailEnvelope
from ..source import SourceKind


class DefinitionModel(BaseModel):
    """Base for definition models: unknown keys are errors."""
    model_config = ConfigDict(extra='forbid', populate_by_name=True)


# =============================================================================
# QUERIES
# =============================================================================

class FieldDefinition(DefinitionModel):
    """One declared output column."""
    field: str = Field(
        min_length=1,
        description="Column alias in the SQL result (case-sensitive)"
    )
    title: Optional[str] = Field(
        default=None,
        description="Display title (defaults to the field name)"
    )
    kind: FieldKind = Field(
        description="Declared kind used to cast the column"
    )

    def to_spec(self) -> FieldSpec:
        return FieldSpec(
            name=self.field,
            title=self.title if self.title is not None else self.field,
            kind=self.kind,
        )


class SeriesByDefinition(DefinitionModel):
    """Pivot one column's distinct values into series."""
    key: str = Field(description="Field whose values name the series")
    values: str = Field(description="Numeric field with the magnitudes")


class ChartDefinition(DefinitionModel):
    """Chart attached to a query."""
    kind: ChartKind = Field(description="Bar, Line or Pizza")
    keys_by: str = Field(description="Field whose values become categories")
    series: Optional[list[str]] = Field(
        default=None,
        description="Fields plotted as one series each"
    )
    series_by: Optional[SeriesByDefinition] = Field(
        default=None,
        description="Pivot specification (alternative to series)"
    )

    @model_validator(mode='after')
    def _one_series_source(self) -> 'ChartDefinition':
        if (self.series is None) == (self.series_by is None):
            raise ValueError("chart needs exactly one of 'series' or 'series_by'")
        if self.series is not None and not self.series:
            raise ValueError("chart 'series' must list at least one field")
        return self

    def referenced_fields(self) -> list[str]:
        names = [self.keys_by, *(self.series or [])]
        if self.series_by is not None:
            names.extend([self.series_by.key, self.series_by.values])
        return names

    def to_spec(self) -> ChartSpec:
        series_by = None
        if self.series_by is not None:
            series_by = SeriesBy(key=self.series_by.key, values=self.series_by.values)
        return ChartSpec(
            kind=self.kind,
            keys_by=self.keys_by,
            series=tuple(self.series or ()),
            series_by=series_by,
        )


class QueryDefinition(DefinitionModel):
    """One named SQL query."""
    title: str = Field(description="Query title shown in the report")
    sql: str = Field(min_length=1, description="Read-only SQL statement")
    fields: list[FieldDefinition] = Field(
        min_length=1,
        description="Declared output fields, in display order"
    )
    chart: Optional[ChartDefinition] = Field(
        default=None,
        description="Optional chart over the result"
    )

    @model_validator(mode='after')
    def _check_references(self) -> 'QueryDefinition':
        names = [definition.field for definition in self.fields]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate field name(s): {', '.join(duplicates)}")

        if self.chart is not None:
            unknown = [name for name in self.chart.referenced_fields() if name not in names]
            if unknown:
                raise ValueError(
                    f"chart references undeclared field(s): {', '.join(dict.fromkeys(unknown))}"
                )
        return self

    def to_spec(self) -> QuerySpec:
        return QuerySpec(
            title=self.title,
            sql=self.sql,
            fields=tuple(definition.to_spec() for definition in self.fields),
            chart=self.chart.to_spec() if self.chart is not None else None,
        )


# =============================================================================
# SOURCE AND DELIVERY
# =============================================================================

class SourceDefinition(DefinitionModel):
    """Where the data comes from."""
    kind: SourceKind = Field(description="Sqlite or Postgres")
    conn: str = Field(description="Backend connection string")


class MailDefinition(DefinitionModel):
    """SMTP delivery settings."""
    host: str = Field(min_length=1, description="SMTP server host")
    port: int = Field(ge=1, le=65535, description="SMTP server port")
    to: Union[str, list[str]] = Field(description="Recipient(s), comma separated or a list")
    sender: str = Field(alias='from', description="From address")
    user: str = Field(default='', description="SMTP login")
    password: str = Field(default='', alias='pass', description="SMTP password")
    subject: Optional[str] = Field(default=None, description="Subject (defaults to the title)")
    starttls: Optional[bool] = Field(
        default=None,
        description="Use STARTTLS (defaults to REPORT_MAILER_SMTP_STARTTLS)"
    )
    sender_name: str = Field(default=DEFAULT_SENDER_NAME, description="From display name")

    def recipients(self) -> tuple[str, ...]:
        raw = self.to.split(',') if isinstance(self.to, str) else self.to
        return tuple(address.strip() for address in raw if address.strip())

    def to_envelope(self, default_starttls: bool = True) -> MailEnvelope:
        return MailEnvelope(
            host=self.host,
            port=self.port,
            sender=self.sender,
            recipients=self.recipients(),
            user=self.user,
            password=self.password,
            starttls=self.starttls if self.starttls is not None else default_starttls,
            sender_name=self.sender_name,
        )


class SendDefinition(DefinitionModel):
    """Delivery targets and output format."""
    stdout: bool = Field(default=False, description="Print the report")
    format: OutputFormat = Field(default=OutputFormat.TXT, description="Html, Markdown or Txt")
    mail: Optional[MailDefinition] = Field(default=None, description="Mail delivery")

    @field_validator('format', mode='before')
    @classmethod
    def _parse_format(cls, value):
        if isinstance(value, str):
            return OutputFormat.parse(value)
        return value


# =============================================================================
# REPORT
# =============================================================================

class ReportDefinition(DefinitionModel):
    """Complete report definition."""
    title: str = Field(description="Report title")
    source: SourceDefinition
    send: SendDefinition = Field(default_factory=SendDefinition)
    querys: list[QueryDefinition] = Field(
        min_length=1,
        description="Queries, run in declaration order"
    )

    def to_query_specs(self) -> tuple[QuerySpec, ...]:
        """Immutable pipeline models for every query, in order."""
        return tuple(query.to_spec() for query in self.querys)


__all__ = [
    'FieldDefinition',
    'SeriesByDefinition',
    'ChartDefinition',
    'QueryDefinition',
    'SourceDefinition',
    'MailDefinition',
    'SendDefinition',
    'ReportDefinition',
]
