"""Entry point wiring inputs, mirror resolution, cache key and installation together."""

import asyncio
import sys
from collections.abc import Mapping

from install_texlive.config import get_config
from install_texlive.core import calculate_cache_key, detect_tl_platform, load_packages
from install_texlive.inputs import InputReader
from install_texlive.logger import get_logger
from install_texlive.models.config import AppConfig
from install_texlive.models.inputs import ActionInputs
from install_texlive.models.mirror import ResolvedRepository
from install_texlive.services.cache import LocalCacheStore
from install_texlive.services.installation import InstallationOrchestrator, TexLiveInstaller
from install_texlive.services.mirrors import MirrorCatalogClient, MirrorSelector
from install_texlive.utils.actions import ActionsReporter

logger = get_logger(__name__)


async def resolve_repository(
    inputs: ActionInputs,
    config: AppConfig,
    catalog_client: MirrorCatalogClient | None = None,
    selector: MirrorSelector | None = None,
) -> ResolvedRepository:
    """
    Determine repository, version and revision for this run.

    An explicit repository input skips the catalog; its version is the
    requested one and no revision is known.
    """
    if inputs.repository is not None:
        logger.info(f"Using repository {inputs.repository}")
        return ResolvedRepository(url=inputs.repository, texlive_version=inputs.texlive_version)

    if catalog_client is None:
        catalog_client = MirrorCatalogClient(config.mirrors.catalog_url, timeout=config.mirrors.request_timeout)
    if selector is None:
        selector = MirrorSelector(config.mirrors.continent, config.mirrors.country)

    catalog = await catalog_client.fetch()
    mirror = selector.select(catalog, inputs.texlive_version)
    if mirror is None:
        # tlmgr serves whatever release ctan has, so the key must not claim a version
        if inputs.texlive_version is not None:
            logger.warning(f"Cannot pin TeX Live {inputs.texlive_version} without the mirror catalog")
        return ResolvedRepository()
    return ResolvedRepository(
        url=mirror.repository_url,
        texlive_version=mirror.texlive_version,
        revision=mirror.revision,
    )


async def run(
    reporter: ActionsReporter | None = None,
    config: AppConfig | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    """
    Run the action.

    Returns:
        Process exit code, 1 if the run failed
    """
    if reporter is None:
        reporter = ActionsReporter()
    if config is None:
        config = get_config()

    try:
        inputs = InputReader(environ).read()
        packages = load_packages(inputs.packages, inputs.package_file)
        tl_platform = detect_tl_platform()

        repository = await resolve_repository(inputs, config)

        cache_key = calculate_cache_key(
            inputs.cache_version,
            packages,
            tl_platform,
            texlive_version=repository.texlive_version,
            revision=repository.revision,
        )

        installer = TexLiveInstaller(
            tl_platform,
            home_dir=config.paths.home_dir,
            tmp_dir=config.paths.tmp_dir,
            default_repository=config.mirrors.default_repository,
        )
        reporter.add_path(installer.bin_dir)

        orchestrator = InstallationOrchestrator(
            store=LocalCacheStore(config.paths.cache_root, retention=config.advanced.cache_retention),
            installer=installer,
            sink=reporter,
            texlive_dir=config.paths.texlive_dir,
        )
        await orchestrator.run(repository, cache_key, packages, inputs.accept_stale)
    except Exception as e:
        # Fail the workflow run if an error occurs
        reporter.set_failed(str(e))

    return reporter.exit_code


def main() -> None:
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
