REDIRECT_TEMPLATE = (
    '<meta http-equiv="refresh" content="1; url={target}" />'
    '<script>window.location.replace("{target}");</script>'
    '<p>You are being redirected, if you still see this page after a while '
    '<a href="{target}">click here</a>.</p>'
)


def make_redirect_page(target):
    """Return a minimal page that sends the browser on to ``target``."""
    return REDIRECT_TEMPLATE.format(target=target)
