"""MailRelay — forward email-send requests to SendGrid and relay the reply."""
