"""In-page DOM extraction function handed to the evaluate_script tool.

The returned object is the hand-off contract with the snapshot parser:
keys and nesting here must stay in sync with ``snapshot_parser``.
"""

DOM_EXTRACTION_FUNCTION = r"""() => {
    const clean = (value) => {
        if (value === null || value === undefined) return null;
        const text = String(value).replace(/\s+/g, ' ').trim();
        return text || null;
    };

    const asArray = (collection) => Array.from(collection || []);

    const readDataId = (el) =>
        el.getAttribute('data-testid') ||
        el.getAttribute('data-test') ||
        el.getAttribute('data-cy') ||
        null;

    const readClasses = (el) =>
        (el.getAttribute('class') || '').split(/\s+/).filter(Boolean);

    const textOf = (el) => (el ? clean(el.textContent) : null);

    function accessibleName(el) {
        const labelledBy = el.getAttribute('aria-labelledby');
        if (labelledBy) {
            const parts = labelledBy.split(/\s+/)
                .map((id) => textOf(document.getElementById(id)))
                .filter(Boolean);
            if (parts.length) return parts.join(' ');
        }
        return clean(el.getAttribute('aria-label'));
    }

    function summariseButton(el) {
        const tag = el.tagName.toLowerCase();
        const source = tag === 'input'
            ? el.getAttribute('value') || el.getAttribute('aria-label')
            : el.textContent;
        return {
            text: clean(source),
            type: clean(el.getAttribute('type')) || tag,
            role: clean(el.getAttribute('role')) || 'button',
            classes: readClasses(el),
            dataTestId: readDataId(el),
        };
    }

    function summariseField(el) {
        const tag = el.tagName.toLowerCase();
        const placeholder = clean(el.getAttribute('placeholder'));
        const label = el.labels && el.labels.length
            ? textOf(el.labels[0])
            : accessibleName(el);
        return {
            name: clean(el.getAttribute('name')),
            type: clean(el.getAttribute('type')) || tag,
            required: el.hasAttribute('required'),
            label: label || placeholder,
            placeholder: placeholder,
        };
    }

    const forms = asArray(document.querySelectorAll('form')).map((form) => ({
        id: clean(form.id),
        name: clean(form.getAttribute('name')),
        action: clean(form.getAttribute('action')),
        method: clean(form.getAttribute('method')) || 'get',
        textualContext: clean(form.textContent),
        fields: asArray(form.querySelectorAll('input, select, textarea')).map(summariseField),
        buttons: asArray(form.querySelectorAll(
            'button, input[type="submit"], input[type="button"], input[type="reset"]'
        )).map(summariseButton),
    }));

    const interactiveElements = asArray(document.querySelectorAll(
        'button, input[type="submit"], input[type="button"], a[role="button"], [role="button"]'
    )).map(summariseButton);

    const ctaClassKeywords = ['primary', 'cta', 'submit', 'confirm', 'continue', 'start'];
    const ctaTextKeywords = [
        'sign up', 'sign in', 'buy', 'checkout', 'add to cart',
        'get started', 'start', 'continue', 'book', 'download',
    ];
    const primaryButtons = interactiveElements.filter((btn) => {
        const classString = btn.classes.join(' ').toLowerCase();
        if (ctaClassKeywords.some((k) => classString.includes(k))) return true;
        const text = (btn.text || '').toLowerCase();
        return ctaTextKeywords.some((k) => text.includes(k));
    });

    const links = asArray(document.querySelectorAll('a[href]')).slice(0, 50).map((a) => ({
        text: clean(a.textContent),
        href: clean(a.href) || '',
    }));

    const headings = asArray(document.querySelectorAll('h1, h2, h3')).map((h) => ({
        level: h.tagName.toLowerCase(),
        text: clean(h.textContent) || '',
    }));

    const dataTestIds = asArray(document.querySelectorAll('[data-testid], [data-test], [data-cy]'))
        .map(readDataId)
        .filter(Boolean);

    const meta = document.querySelector('meta[name="description"]');

    return {
        title: clean(document.title) || 'Untitled',
        metaDescription: clean(meta ? meta.getAttribute('content') : null),
        headings: headings,
        forms: forms,
        primaryButtons: primaryButtons,
        interactiveElements: interactiveElements,
        links: links,
        imagesMissingAlt: document.querySelectorAll('img:not([alt]), img[alt=""]').length,
        dataTestIds: Array.from(new Set(dataTestIds)),
    };
}"""
