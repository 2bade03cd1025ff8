from campaigns.models import Campaign


def make_campaign(date, **kwargs):
    kwargs.setdefault('title', 'City Blood Drive')
    kwargs.setdefault('description', 'Walk-in donations all day')
    kwargs.setdefault('city', 'New Delhi')
    kwargs.setdefault('address', 'Connaught Place')
    kwargs.setdefault('time', '09:00 AM - 05:00 PM')
    kwargs.setdefault('organizer', 'Red Cross')
    kwargs.setdefault('type', 'Blood Drive')
    return Campaign.objects.create(date=date, **kwargs)
