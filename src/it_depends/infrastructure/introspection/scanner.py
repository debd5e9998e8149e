import ast
import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from it_depends.domain import (
    BootstrapSettings,
    ComponentConfig,
    ComponentDeclaration,
    ConfigurationError,
)

logger = logging.getLogger(__name__)


class SourceScanner:
    """Reads component declarations out of Python source files.

    A component source starts with the magic comment, followed by its
    configuration, e.g. ``# depend_on_me(type: 'manager', id: 'mgr')``. The
    first top-level class of the file is the component; the positional
    parameters of its ``__init__`` are its dependency tokens. Sources are
    parsed, never imported or executed.

    Attributes:
        magic_comment: First-line marker of a component source.
    """

    def __init__(self, settings: Optional[BootstrapSettings] = None) -> None:
        self.magic_comment = (settings or BootstrapSettings()).magic_comment

    def scan_source(self, source: str, module: str) -> Optional[ComponentDeclaration]:
        """Read the declaration of one source file.

        Args:
            source: The Python source text.
            module: Dotted module name the source is importable as.

        Returns:
            The declaration, or None if the source carries no magic comment.

        Raises:
            ConfigurationError: If the configuration or the source is malformed,
                or the source defines no class.
        """
        lines = source.splitlines()
        if not lines or not lines[0].startswith(self.magic_comment):
            return None

        config = ComponentConfig.parse(lines[0][len(self.magic_comment) :])

        try:
            tree = ast.parse(source)
        except SyntaxError as e:
            raise ConfigurationError(f"Cannot parse component source of module '{module}': {e}") from e

        class_node = next((node for node in tree.body if isinstance(node, ast.ClassDef)), None)
        if class_node is None:
            raise ConfigurationError(f"Component source of module '{module}' does not define a class")

        name = f"{module}.{class_node.name}" if module else class_node.name
        return ComponentDeclaration.from_config(name, config, self._init_parameters(class_node, name))

    @staticmethod
    def _init_parameters(class_node: ast.ClassDef, name: str) -> Tuple[str, ...]:
        init = next(
            (
                node
                for node in class_node.body
                if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)) and node.name == "__init__"
            ),
            None,
        )
        if init is None:
            return ()

        arguments = init.args
        positional = arguments.posonlyargs + arguments.args
        required = positional[: len(positional) - len(arguments.defaults)]
        for argument, default in zip(arguments.kwonlyargs, arguments.kw_defaults):
            if default is None:
                raise ConfigurationError(
                    f"Parameter '{argument.arg}' of {name} is keyword-only and has no default value"
                )
        # Skip 'self'
        return tuple(argument.arg for argument in required[1:])

    def scan_file(self, path: Union[str, Path], module: str) -> Optional[ComponentDeclaration]:
        """Read the declaration of the source file at ``path``."""
        source = Path(path).read_text(encoding="utf-8-sig")
        return self.scan_source(source, module)

    def scan_directory(self, root: Union[str, Path], package: str = "") -> List[ComponentDeclaration]:
        """Read the declarations of every ``.py`` file under ``root``.

        Files are visited in sorted path order, which is the discovery order
        of the returned declarations.

        Args:
            root: Directory to walk.
            package: Dotted package name ``root`` is importable as.

        Returns:
            The declarations of every component source found.
        """
        root = Path(root)
        declarations = []
        for path in sorted(root.rglob("*.py")):
            parts = list(path.relative_to(root).with_suffix("").parts)
            if parts[-1] == "__init__":
                parts.pop()
            module = ".".join(([package] if package else []) + parts)

            declaration = self.scan_file(path, module)
            if declaration is None:
                continue
            logger.debug("Discovered %s in %s", declaration.name, path)
            declarations.append(declaration)
        return declarations
