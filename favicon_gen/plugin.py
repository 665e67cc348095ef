"""
Static-site generator integration.

A FaviconPlugin holds the site-wide defaults and one generation cache, and
exposes an async ``favicons`` shortcode that a template can call as, e.g.::

    {% favicons 'favicon.svg' %}
    {% favicons 'favicon.svg', appleIconBgColor='black' %}
    {% favicons 'favicon.svg', manifestData={'name': 'My Website'} %}
"""

import logging

from favicon_gen import generator, markup
from favicon_gen.cache import GenerationCache
from favicon_gen.options import GenerationOptions

logger = logging.getLogger(__name__)

SHORTCODE_NAME = "favicons"


class FaviconPlugin:
    def __init__(self, output_dir="./_site", manifest_data=None, generate_manifest=True,
                 skip_cache=False, cache=None):
        self.output_dir = output_dir
        self.defaults = GenerationOptions().with_overrides(
            manifest_data=manifest_data or {},
            generate_manifest=generate_manifest,
            skip_cache=skip_cache,
        )
        self.cache = cache if cache is not None else GenerationCache()

    def register(self, add_shortcode):
        """
        Hand the shortcode to a host's registration hook.

        :param add_shortcode: Callable taking (name, async function)
        """
        add_shortcode(SHORTCODE_NAME, self.shortcode)

    async def generate(self, source_file, **overrides):
        options = self.defaults.with_overrides(overrides)
        return await generator.generate(source_file, self.output_dir, options, cache=self.cache)

    async def shortcode(self, source_file, **overrides):
        """Generate the favicons for ``source_file`` and return their <link> tags."""
        files = await self.generate(source_file, **overrides)
        return markup.render(files)
