"""
MJML Email Templates
"""

from html import escape

THEME = {
    "primary": "#f97316",
    "background": "#f8fafc",
    "text_primary": "#0f172a",
    "text_secondary": "#334155",
    "text_muted": "#64748b",
    "border": "#e2e8f0",
}


def get_base_template(title: str, preview_text: str, content_sections: str) -> str:
    """Wrap content sections in the shared FitZone header/footer"""
    return f"""
    <mjml>
      <mj-head>
        <mj-title>{title}</mj-title>
        <mj-preview>{preview_text}</mj-preview>
        <mj-attributes>
          <mj-all font-family="-apple-system, BlinkMacSystemFont, 'Segoe UI', Arial, sans-serif" />
          <mj-text font-size="16px" line-height="1.6" color="{THEME['text_secondary']}" />
        </mj-attributes>
      </mj-head>
      <mj-body background-color="{THEME['background']}">
        <mj-section background-color="#ffffff" padding="28px 20px 8px 20px">
          <mj-column>
            <mj-text font-size="26px" font-weight="700" color="{THEME['primary']}" align="center">
              FitZone
            </mj-text>
            <mj-divider border-color="{THEME['border']}" border-width="1px" />
          </mj-column>
        </mj-section>
        {content_sections}
        <mj-section padding="16px 20px">
          <mj-column>
            <mj-text font-size="12px" color="{THEME['text_muted']}" align="center">
              FitZone Gym &middot; You are receiving this email because you have a FitZone account.
            </mj-text>
          </mj-column>
        </mj-section>
      </mj-body>
    </mjml>
    """


def welcome_template(user_name: str) -> str:
    content = f"""
        <mj-section background-color="#ffffff" padding="0 40px 32px 40px">
          <mj-column>
            <mj-text font-size="22px" font-weight="600" color="{THEME['text_primary']}">
              Welcome to FitZone, {escape(user_name)}!
            </mj-text>
            <mj-text>
              Your account is ready. Browse classes, book your first session and
              pick a membership plan whenever you are ready.
            </mj-text>
          </mj-column>
        </mj-section>
    """
    return get_base_template("Welcome to FitZone", "Your FitZone account is ready", content)


def password_reset_template(reset_link: str) -> str:
    content = f"""
        <mj-section background-color="#ffffff" padding="0 40px 32px 40px">
          <mj-column>
            <mj-text font-size="22px" font-weight="600" color="{THEME['text_primary']}">
              Reset Your Password
            </mj-text>
            <mj-text>We received a request to reset your password.</mj-text>
            <mj-button background-color="{THEME['primary']}" href="{escape(reset_link)}">
              Reset Password
            </mj-button>
            <mj-text font-size="14px" color="{THEME['text_muted']}">
              This link expires in one hour. If you didn't request it, you can ignore this email.
            </mj-text>
          </mj-column>
        </mj-section>
    """
    return get_base_template("Reset Your Password", "Reset your FitZone password", content)


def order_confirmation_template(
    customer_name: str, order_number: str, items: list[dict], total_amount: float
) -> str:
    rows = "".join(
        f"<tr><td>{escape(item['name'])} &times; {item['quantity']}</td>"
        f"<td style=\"text-align:right\">&#8377;{item['price'] * item['quantity']:,.2f}</td></tr>"
        for item in items
    )
    content = f"""
        <mj-section background-color="#ffffff" padding="0 40px 32px 40px">
          <mj-column>
            <mj-text font-size="22px" font-weight="600" color="{THEME['text_primary']}">
              Thanks for your order, {escape(customer_name)}!
            </mj-text>
            <mj-text>Order <strong>{escape(order_number)}</strong> has been confirmed.</mj-text>
            <mj-table>{rows}
              <tr><td><strong>Total</strong></td>
              <td style="text-align:right"><strong>&#8377;{total_amount:,.2f}</strong></td></tr>
            </mj-table>
          </mj-column>
        </mj-section>
    """
    return get_base_template(
        f"Order {order_number} confirmed", "Your FitZone store order is confirmed", content
    )
