from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    scrape_api_token: str = ""
    scrape_http_timeout_s: int = 12
    scrape_poll_retry_times: int = 2
    scrape_poll_retry_delay_s: float = 1.0
    scrape_redis_url: str = "redis://localhost:6379/0"
    scrape_result_key_prefix: str = "scrape:result"
    scrape_log_level: str = "INFO"
    scrape_log_file: str = ""

    apify_token: str = ""
    apify_base_url: str = "https://api.apify.com"
    apify_results_limit: int = 30
    apify_instagram_actor: str = "apify~instagram-profile-scraper"
    apify_facebook_actor: str = "apify~facebook-posts-scraper"
    apify_threads_actor: str = "apify~threads-profile-api-scraper"
    apify_tiktok_actor: str = "clockworks~tiktok-scraper"
    apify_twitter_actor: str = "apidojo~tweet-scraper"
    apify_youtube_actor: str = "streamers~youtube-scraper"

    trigger_secret_key: str = ""
    trigger_base_url: str = "https://api.trigger.dev"


settings = Settings()
