# colorizer/shared/container.py
from dependency_injector import containers, providers

from colorizer.shared.config import settings
from colorizer.core.domain.models import Color, default_colors
from colorizer.adapters.persistence.filesystem_repo import FileSystemColorSettingsRepository
from colorizer.services.rule_colorizer import RuleColorizer

class Container(containers.DeclarativeContainer):
    """
    Dependency Injection Container.

    This declarative container defines the assembly instructions for the colorizer.
    The host application must supply the expression compiler:

        container = Container()
        container.predicate_compiler.override(providers.Object(my_compiler))
        colorizer = container.rule_colorizer()
    """

    # 1. Configuration
    # We load settings directly, but wrapping them allows overriding in tests.
    config = providers.Configuration(pydantic_settings=[settings])

    # 2. Collaborators owned by the host (no default implementation)
    predicate_compiler = providers.Dependency()

    # 3. Gateways (Infrastructure Adapters)

    # Persistence (Singleton: One access point to the settings directory)
    color_settings_repository = providers.Singleton(
        FileSystemColorSettingsRepository,
        settings_dir=config.SETTINGS_DIRECTORY,
        compiler=predicate_compiler,
        extension=config.COLORS_EXTENSION,
    )

    # Configuration holds plain dicts; rebuild the Color values from them.
    palette = providers.Callable(
        default_colors,
        odd_row_background=providers.Callable(Color.model_validate, config.COLOR_ODD_ROW_BACKGROUND),
        find_logger_background=providers.Callable(Color.model_validate, config.FIND_LOGGER_BACKGROUND),
    )

    # 4. Services
    # Singleton: every view of a session shares one rule store.
    rule_colorizer = providers.Singleton(
        RuleColorizer,
        compiler=predicate_compiler,
        repository=color_settings_repository,
        default_rule_set_name=config.DEFAULT_COLOR_RULE_NAME,
        palette=palette,
    )
