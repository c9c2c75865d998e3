"""Validated settings for configuration files.

FileManager and ConfigurationStore take their constructor arguments through
StoreSettings so invalid file names and namespaces fail fast with a
pydantic ValidationError (a ValueError subclass).
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from albatross.core.constants import DEFAULT_NAMESPACE


class StoreSettings(BaseModel):
    """Location and identity of one configuration file.

    Attributes:
        data_dir: Directory the file name is resolved against.
        file_name: Name or relative path of the file ("config.yml", "lang/lang-eng.yml").
        namespace: Prefix for synthetic comment keys; must be a plain YAML key.
        resource_name: Bundled default used to bootstrap the file. Defaults
            to file_name.
        resource_package: Package anchor for importlib.resources lookup of
            resource_name. None disables bootstrapping from a resource.

    """

    model_config = ConfigDict(frozen=True)

    data_dir: Path
    file_name: str = Field(min_length=1)
    namespace: str = Field(default=DEFAULT_NAMESPACE, pattern=r"^[A-Za-z][A-Za-z0-9_-]*$")
    resource_name: str | None = None
    resource_package: str | None = None

    @field_validator("file_name")
    @classmethod
    def _check_file_name(cls, value: str) -> str:
        name = value.strip().lstrip("/")
        if not name or name.endswith("/"):
            raise ValueError(f"Invalid file name: {value!r}")
        return value

    @property
    def path(self) -> Path:
        """Absolute location of the file on disk.

        A leading ``/`` in file_name is taken relative to data_dir.
        """
        return self.data_dir / self.file_name.strip().lstrip("/")

    @property
    def effective_resource_name(self) -> str:
        """Resource used for bootstrapping, falling back to the file name."""
        return self.resource_name or self.file_name.strip().lstrip("/")
