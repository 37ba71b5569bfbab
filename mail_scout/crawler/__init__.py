"""mail_scout.crawler: обход сайта, загрузка страниц и события обхода."""
