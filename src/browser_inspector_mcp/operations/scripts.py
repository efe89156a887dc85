"""JavaScript evaluated inside inspected pages.

Each script is a function literal passed to ``evaluate``. Arguments and
results are plain JSON-compatible values so the contract does not depend on
the automation library.
"""

from __future__ import annotations

ERROR_SELECTORS = [
    ".error",
    ".alert-danger",
    ".notification.error",
    '[class*="error"]',
    ".text-danger",
    ".has-error",
]

# Shared helpers prepended to scans that need them.
_HELPERS = """
    const isVisible = (el) =>
        !!(el.offsetWidth || el.offsetHeight || el.getClientRects().length) &&
        window.getComputedStyle(el).visibility !== 'hidden';

    const collectErrors = (selectors) => {
        const seen = new Set();
        const errors = [];
        document.querySelectorAll(selectors.join(',')).forEach(el => {
            if (seen.has(el)) return;
            seen.add(el);
            const text = (el.textContent || '').trim();
            if (!text || !isVisible(el)) return;
            errors.push({
                selector: selectors.find(s => el.matches(s)) || '',
                text,
                class_name: typeof el.className === 'string' ? el.className : '',
            });
        });
        return errors;
    };
"""

# arg: {errorSelectors: string[]}
# result: {forms, buttons, api_links, links, errors, structure}
STRUCTURE_SCAN = (
    "(arg) => {"
    + _HELPERS
    + """
    const result = {forms: [], buttons: [], api_links: [], links: [], errors: [], structure: {}};

    document.querySelectorAll('form').forEach((form, index) => {
        result.forms.push({
            index,
            action: form.getAttribute('action') ? form.action : '',
            method: (form.getAttribute('method') || '').toUpperCase(),
            inputs: Array.from(form.querySelectorAll('input, select, textarea')).map(input => ({
                name: input.name || '',
                id: input.id || '',
                type: input.type || input.tagName.toLowerCase(),
                placeholder: input.placeholder || '',
                required: !!input.required,
            })),
        });
    });

    document.querySelectorAll('button, input[type="button"], input[type="submit"]').forEach(btn => {
        result.buttons.push({
            text: ((btn.textContent || '').trim() || btn.value || ''),
            type: btn.type || '',
            id: btn.id || '',
            class_name: typeof btn.className === 'string' ? btn.className : '',
            has_click_handler: typeof btn.onclick === 'function',
        });
    });

    document.querySelectorAll('a[href]').forEach(link => {
        const text = (link.textContent || '').trim();
        if (link.href.includes('/api/')) {
            result.api_links.push({href: link.href, text});
        } else {
            result.links.push({href: link.href, text: text.substring(0, 50)});
        }
    });

    result.errors = collectErrors(arg.errorSelectors);

    const frameworks = [];
    if (typeof window.React !== 'undefined' || document.querySelector('[data-reactroot]')) frameworks.push('React');
    if (typeof window.Vue !== 'undefined' || document.querySelector('[data-v-app]')) frameworks.push('Vue');
    if (typeof window.angular !== 'undefined' || document.querySelector('[ng-version]')) frameworks.push('Angular');
    if (typeof window.jQuery !== 'undefined') frameworks.push('jQuery');

    result.structure = {
        total_elements: document.querySelectorAll('*').length,
        scripts: document.querySelectorAll('script').length,
        stylesheets: document.querySelectorAll('link[rel="stylesheet"]').length,
        images: document.querySelectorAll('img').length,
        frameworks,
    };
    return result;
}"""
)

# arg: {errorSelectors: string[]}
# result: [{selector, text, class_name}]
ERROR_SCAN = (
    "(arg) => {"
    + _HELPERS
    + """
    return collectErrors(arg.errorSelectors);
}"""
)

# arg: {limit: number}
# result: number of elements clicked
CLICK_AFFORDANCES = """(arg) => {
    let clicked = 0;
    const candidates = Array.from(document.querySelectorAll('button, [data-action]')).slice(0, arg.limit);
    for (const el of candidates) {
        try {
            el.click();
            clicked += 1;
        } catch (e) {
            console.log('Click failed:', e);
        }
    }
    return clicked;
}"""

# Evaluated on the form element.
# arg: {key: string, value: string}
# result: {success: boolean, error: string | null}
FILL_FIELD = """(form, arg) => {
    const escaped = CSS.escape(arg.key);
    const input = form.querySelector(`[name="${escaped}"]`) || form.querySelector(`#${escaped}`);
    if (!input) {
        return {success: false, error: `Field not found: ${arg.key}`};
    }
    try {
        input.value = arg.value;
        input.dispatchEvent(new Event('input', {bubbles: true}));
        input.dispatchEvent(new Event('change', {bubbles: true}));
        return {success: true, error: null};
    } catch (e) {
        return {success: false, error: `Could not set ${arg.key}: ${e.message}`};
    }
}"""
