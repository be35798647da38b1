"""Built-in default scoring configuration."""

import copy
from typing import Any

from pagescore.knowledge.strings import message_id as _m

_DEFAULT_SETTINGS: dict[str, Any] = {
    "output": "json",
    "locale": "en-US",
    "maxWaitForLoad": 45000,
    "throttlingMethod": "devtools",
    "emulatedFormFactor": "mobile",
    "disableStorageReset": False,
}

_PASSES: list[dict[str, Any]] = [
    {
        "passName": "defaultPass",
        "default": True,
        "recordTrace": True,
        "useThrottling": True,
        "pauseAfterLoadMs": 1000,
        "networkQuietThresholdMs": 1000,
        "cpuQuietThresholdMs": 1000,
        "gatherers": [
            "scripts",
            "css-usage",
            "viewport-dimensions",
            "manifest",
            "runtime-exceptions",
            "chrome-console-messages",
            "accessibility",
            "image-elements",
            "link-elements",
            "meta-elements",
            "dobetterweb/anchors-with-no-rel-noopener",
            "dobetterweb/appcache",
            "dobetterweb/doctype",
            "dobetterweb/domstats",
            "dobetterweb/js-libraries",
            "dobetterweb/optimized-images",
            "dobetterweb/password-inputs-with-prevented-paste",
            "dobetterweb/response-compression",
            "dobetterweb/tags-blocking-first-paint",
            "seo/font-size",
            "seo/crawlable-links",
            "seo/hreflang",
            "seo/embedded-content",
            "seo/canonical",
            "seo/robots-txt",
        ],
    },
    {
        "passName": "offlinePass",
        "gatherers": [
            "service-worker",
            "offline",
            "start-url",
        ],
    },
    {
        "passName": "redirectPass",
        # Stylesheets, fonts and images are not needed to observe redirects.
        "blockedUrlPatterns": [
            "*.css", "*.jpg", "*.jpeg", "*.png", "*.gif", "*.svg", "*.ttf", "*.woff", "*.woff2",
        ],
        "gatherers": [
            "http-redirect",
            "html-without-javascript",
        ],
    },
]

_AUDITS: list[str] = [
    "is-on-https",
    "redirects-http",
    "service-worker",
    "works-offline",
    "viewport",
    "without-javascript",
    "metrics/first-contentful-paint",
    "metrics/first-meaningful-paint",
    "load-fast-enough-for-pwa",
    "metrics/speed-index",
    "screenshot-thumbnails",
    "final-screenshot",
    "metrics/estimated-input-latency",
    "errors-in-console",
    "time-to-first-byte",
    "metrics/first-cpu-idle",
    "metrics/interactive",
    "user-timings",
    "critical-request-chains",
    "redirects",
    "installable-manifest",
    "splash-screen",
    "themed-omnibox",
    "content-width",
    "image-aspect-ratio",
    "deprecations",
    "mainthread-work-breakdown",
    "bootup-time",
    "uses-rel-preload",
    "uses-rel-preconnect",
    "font-display",
    "network-requests",
    "metrics",
    "offline-start-url",
    "manual/pwa-cross-browser",
    "manual/pwa-page-transitions",
    "manual/pwa-each-page-has-url",
    "accessibility/aria-allowed-attr",
    "accessibility/aria-required-attr",
    "accessibility/aria-required-children",
    "accessibility/aria-required-parent",
    "accessibility/aria-roles",
    "accessibility/aria-valid-attr-value",
    "accessibility/aria-valid-attr",
    "accessibility/audio-caption",
    "accessibility/button-name",
    "accessibility/bypass",
    "accessibility/color-contrast",
    "accessibility/definition-list",
    "accessibility/dlitem",
    "accessibility/document-title",
    "accessibility/duplicate-id",
    "accessibility/frame-title",
    "accessibility/html-has-lang",
    "accessibility/html-lang-valid",
    "accessibility/image-alt",
    "accessibility/input-image-alt",
    "accessibility/label",
    "accessibility/layout-table",
    "accessibility/link-name",
    "accessibility/list",
    "accessibility/listitem",
    "accessibility/meta-refresh",
    "accessibility/meta-viewport",
    "accessibility/object-alt",
    "accessibility/tabindex",
    "accessibility/td-headers-attr",
    "accessibility/th-has-data-cells",
    "accessibility/valid-lang",
    "accessibility/video-caption",
    "accessibility/video-description",
    "accessibility/manual/accesskeys",
    "accessibility/manual/custom-controls-labels",
    "accessibility/manual/custom-controls-roles",
    "accessibility/manual/focus-traps",
    "accessibility/manual/focusable-controls",
    "accessibility/manual/heading-levels",
    "accessibility/manual/interactive-element-affordance",
    "accessibility/manual/logical-tab-order",
    "accessibility/manual/managed-focus",
    "accessibility/manual/offscreen-content-hidden",
    "accessibility/manual/use-landmarks",
    "accessibility/manual/visual-order-follows-dom",
    "byte-efficiency/uses-long-cache-ttl",
    "byte-efficiency/total-byte-weight",
    "byte-efficiency/offscreen-images",
    "byte-efficiency/render-blocking-resources",
    "byte-efficiency/unminified-css",
    "byte-efficiency/unminified-javascript",
    "byte-efficiency/unused-css-rules",
    "byte-efficiency/uses-webp-images",
    "byte-efficiency/uses-optimized-images",
    "byte-efficiency/uses-text-compression",
    "byte-efficiency/uses-responsive-images",
    "byte-efficiency/efficient-animated-content",
    "dobetterweb/appcache-manifest",
    "dobetterweb/doctype",
    "dobetterweb/dom-size",
    "dobetterweb/external-anchors-use-rel-noopener",
    "dobetterweb/geolocation-on-start",
    "dobetterweb/no-document-write",
    "dobetterweb/no-vulnerable-libraries",
    "dobetterweb/js-libraries",
    "dobetterweb/notification-on-start",
    "dobetterweb/password-inputs-can-be-pasted-into",
    "dobetterweb/uses-http2",
    "dobetterweb/uses-passive-event-listeners",
    "seo/meta-description",
    "seo/http-status-code",
    "seo/font-size",
    "seo/link-text",
    "seo/is-crawlable",
    "seo/robots-txt",
    "seo/hreflang",
    "seo/plugins",
    "seo/canonical",
    "seo/manual/mobile-friendly",
    "seo/manual/structured-data",
]

_GROUPS: dict[str, dict[str, str]] = {
    "metrics": {
        "title": _m("metricGroupTitle"),
    },
    "load-opportunities": {
        "title": _m("loadOpportunitiesGroupTitle"),
        "description": _m("loadOpportunitiesGroupDescription"),
    },
    "diagnostics": {
        "title": _m("diagnosticsGroupTitle"),
        "description": _m("diagnosticsGroupDescription"),
    },
    "pwa-fast-reliable": {
        "title": _m("pwaFastReliableGroupTitle"),
    },
    "pwa-installable": {
        "title": _m("pwaInstallableGroupTitle"),
    },
    "pwa-optimized": {
        "title": _m("pwaOptimizedGroupTitle"),
    },
    "a11y-color-contrast": {
        "title": _m("a11yColorContrastGroupTitle"),
        "description": _m("a11yColorContrastGroupDescription"),
    },
    "a11y-describe-contents": {
        "title": _m("a11yDescribeContentsGroupTitle"),
        "description": _m("a11yDescribeContentsGroupDescription"),
    },
    "a11y-well-structured": {
        "title": _m("a11yWellStructuredGroupTitle"),
        "description": _m("a11yWellStructuredGroupDescription"),
    },
    "a11y-aria": {
        "title": _m("a11yAriaGroupTitle"),
        "description": _m("a11yAriaGroupDescription"),
    },
    "a11y-correct-attributes": {
        "title": _m("a11yCorrectAttributesGroupTitle"),
        "description": _m("a11yCorrectAttributesGroupDescription"),
    },
    "a11y-element-names": {
        "title": _m("a11yElementNamesGroupTitle"),
        "description": _m("a11yElementNamesGroupDescription"),
    },
    "a11y-language": {
        "title": _m("a11yLanguageGroupTitle"),
        "description": _m("a11yLanguageGroupDescription"),
    },
    "a11y-meta": {
        "title": _m("a11yMetaGroupTitle"),
        "description": _m("a11yMetaGroupDescription"),
    },
    "seo-mobile": {
        "title": "Mobile Friendly",
        "description": (
            "Make sure your pages are mobile friendly so users don't have to pinch or zoom "
            "in order to read the content pages. "
            "[Learn more](https://developers.google.com/search/mobile-sites/)."
        ),
    },
    "seo-content": {
        "title": "Content Best Practices",
        "description": (
            "Format your HTML in a way that enables crawlers to better understand "
            "your app's content."
        ),
    },
    "seo-crawl": {
        "title": "Crawling and Indexing",
        "description": "To appear in search results, crawlers need access to your app.",
    },
}


def _refs(group: str | None, *entries: tuple[str, float]) -> list[dict[str, Any]]:
    refs = []
    for audit_id, weight in entries:
        ref: dict[str, Any] = {"id": audit_id, "weight": weight}
        if group is not None:
            ref["group"] = group
        refs.append(ref)
    return refs


_CATEGORIES: dict[str, dict[str, Any]] = {
    "performance": {
        "title": _m("performanceCategoryTitle"),
        "auditRefs": [
            *_refs(
                "metrics",
                ("first-contentful-paint", 3),
                ("first-meaningful-paint", 1),
                ("speed-index", 4),
                ("interactive", 5),
                ("first-cpu-idle", 2),
                ("estimated-input-latency", 0),
            ),
            *_refs(
                "load-opportunities",
                ("render-blocking-resources", 0),
                ("uses-responsive-images", 0),
                ("offscreen-images", 0),
                ("unminified-css", 0),
                ("unminified-javascript", 0),
                ("unused-css-rules", 0),
                ("uses-optimized-images", 0),
                ("uses-webp-images", 0),
                ("uses-text-compression", 0),
                ("uses-rel-preconnect", 0),
                ("time-to-first-byte", 0),
                ("redirects", 0),
                ("uses-rel-preload", 0),
                ("efficient-animated-content", 0),
            ),
            *_refs(
                "diagnostics",
                ("total-byte-weight", 0),
                ("uses-long-cache-ttl", 0),
                ("dom-size", 0),
                ("critical-request-chains", 0),
            ),
            *_refs(None, ("network-requests", 0), ("metrics", 0)),
            *_refs("diagnostics", ("user-timings", 0), ("bootup-time", 0)),
            *_refs(None, ("screenshot-thumbnails", 0), ("final-screenshot", 0)),
            *_refs("diagnostics", ("mainthread-work-breakdown", 0), ("font-display", 0)),
        ],
    },
    "accessibility": {
        "title": "Accessibility",
        "description": (
            "These checks highlight opportunities to [improve the accessibility of your "
            "web app](https://developers.google.com/web/fundamentals/accessibility). Only a "
            "subset of accessibility issues can be automatically detected so manual testing "
            "is also encouraged."
        ),
        "manualDescription": (
            "These items address areas which an automated testing tool cannot cover. Learn "
            "more in our guide on [conducting an accessibility review]"
            "(https://developers.google.com/web/fundamentals/accessibility/how-to-review)."
        ),
        "auditRefs": [
            *_refs(
                "a11y-aria",
                ("aria-allowed-attr", 3),
                ("aria-required-attr", 2),
                ("aria-required-children", 5),
                ("aria-required-parent", 2),
                ("aria-roles", 3),
                ("aria-valid-attr-value", 2),
                ("aria-valid-attr", 5),
            ),
            *_refs("a11y-correct-attributes", ("audio-caption", 4)),
            *_refs("a11y-element-names", ("button-name", 10)),
            *_refs("a11y-describe-contents", ("bypass", 10)),
            *_refs("a11y-color-contrast", ("color-contrast", 6)),
            *_refs("a11y-well-structured", ("definition-list", 1), ("dlitem", 1)),
            *_refs("a11y-describe-contents", ("document-title", 2)),
            *_refs("a11y-well-structured", ("duplicate-id", 5)),
            *_refs("a11y-describe-contents", ("frame-title", 5)),
            *_refs("a11y-language", ("html-has-lang", 4), ("html-lang-valid", 1)),
            *_refs("a11y-correct-attributes", ("image-alt", 8), ("input-image-alt", 1)),
            *_refs("a11y-describe-contents", ("label", 10), ("layout-table", 1)),
            *_refs("a11y-element-names", ("link-name", 9)),
            *_refs("a11y-well-structured", ("list", 5), ("listitem", 4)),
            *_refs("a11y-meta", ("meta-refresh", 1), ("meta-viewport", 3)),
            *_refs("a11y-describe-contents", ("object-alt", 4)),
            *_refs(
                "a11y-correct-attributes",
                ("tabindex", 4),
                ("td-headers-attr", 1),
                ("th-has-data-cells", 1),
            ),
            *_refs("a11y-language", ("valid-lang", 1)),
            *_refs("a11y-describe-contents", ("video-caption", 4), ("video-description", 3)),
            # Manual audits
            *_refs(
                None,
                ("accesskeys", 0),
                ("logical-tab-order", 0),
                ("focusable-controls", 0),
                ("interactive-element-affordance", 0),
                ("managed-focus", 0),
                ("focus-traps", 0),
                ("custom-controls-labels", 0),
                ("custom-controls-roles", 0),
                ("visual-order-follows-dom", 0),
                ("offscreen-content-hidden", 0),
                ("heading-levels", 0),
                ("use-landmarks", 0),
            ),
        ],
    },
    "best-practices": {
        "title": "Best Practices",
        "auditRefs": _refs(
            None,
            ("appcache-manifest", 1),
            ("is-on-https", 1),
            ("uses-http2", 1),
            ("uses-passive-event-listeners", 1),
            ("no-document-write", 1),
            ("external-anchors-use-rel-noopener", 1),
            ("geolocation-on-start", 1),
            ("doctype", 1),
            ("no-vulnerable-libraries", 1),
            ("js-libraries", 0),
            ("notification-on-start", 1),
            ("deprecations", 1),
            ("password-inputs-can-be-pasted-into", 1),
            ("errors-in-console", 1),
            ("image-aspect-ratio", 1),
        ),
    },
    "seo": {
        "title": "SEO",
        "description": (
            "These checks ensure that your page is optimized for search engine results "
            "ranking. There are additional factors this tool does not check that may affect "
            "your search ranking. [Learn more](https://support.google.com/webmasters/answer/35769)."
        ),
        "manualDescription": (
            "Run these additional validators on your site to check additional SEO best practices."
        ),
        "auditRefs": [
            *_refs("seo-mobile", ("viewport", 1)),
            *_refs("seo-content", ("document-title", 1), ("meta-description", 1)),
            *_refs("seo-crawl", ("http-status-code", 1)),
            *_refs("seo-content", ("link-text", 1)),
            *_refs("seo-crawl", ("is-crawlable", 1), ("robots-txt", 1)),
            *_refs("seo-content", ("hreflang", 1), ("canonical", 1)),
            *_refs("seo-mobile", ("font-size", 1)),
            *_refs("seo-content", ("plugins", 1)),
            # Manual audits
            *_refs(None, ("mobile-friendly", 0), ("structured-data", 0)),
        ],
    },
    "pwa": {
        "title": "Progressive Web App",
        "description": (
            "These checks validate the aspects of a Progressive Web App. "
            "[Learn more](https://developers.google.com/web/progressive-web-apps/checklist)."
        ),
        "manualDescription": (
            "These checks are required by the baseline "
            "[PWA Checklist](https://developers.google.com/web/progressive-web-apps/checklist) "
            "but are not automatically checked. They do not affect your score but it's "
            "important that you verify them manually."
        ),
        "auditRefs": [
            *_refs(
                "pwa-fast-reliable",
                ("load-fast-enough-for-pwa", 7),
                ("works-offline", 5),
                ("offline-start-url", 1),
            ),
            *_refs(
                "pwa-installable",
                ("is-on-https", 2),
                ("service-worker", 1),
                ("installable-manifest", 2),
            ),
            *_refs(
                "pwa-optimized",
                ("redirects-http", 2),
                ("splash-screen", 1),
                ("themed-omnibox", 1),
                ("content-width", 1),
                ("viewport", 2),
                ("without-javascript", 1),
            ),
            # Manual audits
            *_refs(
                None,
                ("pwa-cross-browser", 0),
                ("pwa-page-transitions", 0),
                ("pwa-each-page-has-url", 0),
            ),
        ],
    },
}

_DEFAULT_CONFIG: dict[str, Any] = {
    "settings": _DEFAULT_SETTINGS,
    "passes": _PASSES,
    "audits": _AUDITS,
    "groups": _GROUPS,
    "categories": _CATEGORIES,
}


def get_default_config() -> dict[str, Any]:
    """Get the built-in configuration document.

    Returns a fresh deep copy on every call, so callers may modify it.
    The string table for its message ids comes from
    ``pagescore.knowledge.strings.get_ui_strings``.
    """
    return copy.deepcopy(_DEFAULT_CONFIG)
