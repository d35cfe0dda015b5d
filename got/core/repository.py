"""Repository management for got."""

import logging
from pathlib import Path
from typing import Optional

from .config import Config
from .errors import NotARepository, PathError, RepositoryExists
from .objects import GOT_DIR, Blob, GotObject, Tree
from .store import ObjectStore

logger = logging.getLogger(__name__)


class Repository:
    """
    Represents a got repository.

    A repository is the explicit context every operation runs against:
    the work tree root, its .got directory and the object store inside it.
    """

    def __init__(self, path: str = '.'):
        """
        Initialize repository.

        Args:
            path: Path to repository root (defaults to current directory)
        """
        self.work_tree = Path(path).resolve()
        self.got_dir = self.work_tree / GOT_DIR
        self.objects_dir = self.got_dir / 'objects'
        self.config_file = self.got_dir / 'config'

        self._store = None
        self._config = None

    @property
    def store(self) -> ObjectStore:
        """Get ObjectStore instance."""
        if self._store is None:
            self._store = ObjectStore(self.objects_dir)
        return self._store

    @property
    def config(self) -> Config:
        """Get Config instance."""
        if self._config is None:
            self._config = Config(self.config_file)
        return self._config

    def exists(self) -> bool:
        """Return True if the .got directory is present."""
        return self.got_dir.is_dir()

    def init(self) -> 'Repository':
        """
        Initialize a new repository.

        Creates the .got directory structure:
        .got/
        ├── objects/       # Object database
        └── config         # Repository configuration

        Returns:
            Repository: self for method chaining

        Raises:
            RepositoryExists: If repository already exists
        """
        if self.got_dir.exists():
            raise RepositoryExists(self.got_dir)

        self.got_dir.mkdir()
        self.objects_dir.mkdir()
        self.config_file.write_text('[core]\n\trepositoryformatversion = 0\n')

        logger.debug("Initialized repository at %s", self.got_dir)
        return self

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Searches from the given path upwards until it finds a .got directory
        or reaches the filesystem root.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / GOT_DIR).is_dir():
                return cls(str(current))

            # Reached filesystem root
            if current == current.parent:
                return None

            current = current.parent

    @classmethod
    def discover(cls, path: str = '.') -> 'Repository':
        """
        Like find_repository, but fail when nothing is found.

        Raises:
            NotARepository: If no .got directory exists in path or its parents
        """
        repo = cls.find_repository(path)
        if repo is None:
            raise NotARepository(Path(path).resolve())
        return repo

    def relative_path(self, path) -> Path:
        """
        Return path relative to the work tree.

        Raises:
            PathError: If path is outside the work tree or inside .got
        """
        resolved = Path(path).resolve()

        try:
            relative = resolved.relative_to(self.work_tree)
        except ValueError:
            raise PathError(path, f"outside repository {self.work_tree}") from None

        if relative.parts and relative.parts[0] == GOT_DIR:
            raise PathError(path, "inside the repository metadata directory")
        return relative

    def build_object(self, path) -> GotObject:
        """
        Build the object graph for a file or directory without writing it.

        Args:
            path: File or directory inside the work tree

        Returns:
            GotObject: Blob for a file, Tree for a directory

        Raises:
            PathError: If path is outside the work tree or does not exist
        """
        self.relative_path(path)
        target = Path(path)

        if not target.exists():
            raise PathError(path, "no such file or directory")
        if target.is_dir():
            return Tree.build(target, self.work_tree)
        return Blob.from_file(target)

    def write_object(self, obj: GotObject) -> str:
        """
        Write object and any in-memory descendants to the object store.

        Args:
            obj: Blob or Tree to write

        Returns:
            str: SHA-1 hash of the object
        """
        return obj.persist(self.store, self.config.compression_level())

    def read_object(self, name: str) -> GotObject:
        """
        Read object from repository.

        Args:
            name: Full hash or unambiguous abbreviation

        Returns:
            GotObject: Deserialized Blob or Tree

        Raises:
            ObjectNotFound: If no object matches
            CorruptObject: If the stored object is invalid
        """
        return GotObject.load(self.store, self.store.resolve(name))

    def __repr__(self) -> str:
        """String representation of repository."""
        return f"Repository(path={self.work_tree})"
