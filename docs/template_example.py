"""
Example template configuration for the Kconfig HTML reference.

You can customize this file to control the header and the limits used
when walking the Kconfig tree.

Usage:
    kconfig2html --template docs/template_example.py -o config.html nuttx
"""

CONFIG = {
    # Page title and banner heading
    "title": "NuttX Configuration Options",
    "banner": "NuttX Configuration Variables",

    # Background image referenced by the page body
    "background": "backgd.gif",

    # Show the "Last Updated" date under the banner
    "include_date": True,
    "date_format": "%B %d, %Y",

    # Where `source "$APPSDIR/..."` points, relative to the Kconfig root
    "apps_dir": "../apps",

    # Render variables that have no prompt
    "show_internal": False,
}
